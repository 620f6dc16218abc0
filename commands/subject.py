# commands/subject.py

from utils.image_io import load_image, save_image, write_png_stdout
from utils.logs import log


class SubjectCommand:
    """
    Removes the background from an image. The result is a PNG with an alpha
    channel, written to `output` or to stdout.
    """

    def __init__(self, segmenter, loader=load_image, stream=None):
        self.segmenter = segmenter
        self.loader = loader
        self.stream = stream

    def run(self, input, output=None, cropped=False, stdout=False):
        log(f"Removing background from {input}...")
        frame = self.loader(input)
        subject = self.segmenter.extract(frame, cropped=cropped)

        if stdout or not output:
            write_png_stdout(subject, stream=self.stream)
            return None

        save_image(output, subject)
        log(f"Saved to {output}")
        return {"input": input, "output": output}
