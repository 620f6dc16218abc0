"""
seev: a command line wrapper over computer-vision models.

Every command prints its results as JSON on stdout; diagnostics go to stderr.
"""

import argparse
import functools
import sys

import requests

from commands.all import AllCommand
from commands.classify import ClassifyCommand
from commands.distance import DistanceCommand
from commands.embeddings import EmbeddingCommand
from commands.faces import FaceCommand
from commands.humans import HumanCommand
from commands.nsfw import NsfwCommand
from commands.poses import PoseCommand
from commands.sha1 import Sha1Command
from commands.subject import SubjectCommand
from commands.text import TextCommand

from utils.classifiers.clip_classifier import ClipClassifier
from utils.classifiers.nsfw_classifier import NsfwClassifier
from utils.config import load_config
from utils.detectors.hog_detector import HogPeopleDetector
from utils.detectors.insight_detector import InsightDetector
from utils.embeddings.clip_embedder import ClipEmbedder
from utils.embeddings.insight_embedder import InsightEmbedder
from utils.errors import ModelUnavailableError, NoSubjectFoundError, SeeVError
from utils.face_alignment import FaceAligner
from utils.image_io import load_image
from utils.logs import install, log
from utils.output import print_json
from utils.pose_estimator import PoseEstimator
from utils.subject_segmenter import SubjectSegmenter
from utils.text_recognizer import TextRecognizer

VERSION = "1.0.2"
DEFAULT_COMMAND = "subject"
COMMANDS = (
    "subject", "faces", "humans", "text", "poses", "classify",
    "embeddings", "distance", "sha1", "nsfw", "all",
)
GLOBAL_VALUE_OPTIONS = ("--config", "--log-file")


# --------------------------------------------------------------
# Backend construction


def prepared(backend):
    backend.prepare()
    return backend


def make_loader(config):
    return functools.partial(load_image, timeout=config["http"]["timeout"])


def build_face_command(config, embeddings=False):
    cfg = config["faces"]
    detector = prepared(InsightDetector(
        model_name=cfg["model_name"],
        det_size=cfg["det_size"],
        ctx_id=cfg["ctx_id"],
        min_confidence=cfg["min_confidence"],
    ))
    aligner = embedder = None
    if embeddings:
        aligner = FaceAligner()
        embedder = prepared(InsightEmbedder(model_name=cfg["model_name"], ctx_id=cfg["ctx_id"]))
    return FaceCommand(detector, aligner=aligner, embedder=embedder, loader=make_loader(config))


def build_human_command(config):
    cfg = config["humans"]
    detector = prepared(HogPeopleDetector(
        win_stride=cfg["win_stride"],
        padding=cfg["padding"],
        scale=cfg["scale"],
    ))
    return HumanCommand(detector, loader=make_loader(config))


def build_text_command(config):
    recognizer = prepared(TextRecognizer(**config["text"]))
    return TextCommand(recognizer, loader=make_loader(config))


def build_pose_command(config):
    cfg = config["poses"]
    estimator = prepared(PoseEstimator(
        model=cfg["model"],
        proto=cfg["proto"],
        input_size=cfg["input_size"],
        joint_threshold=cfg["joint_threshold"],
    ))
    return PoseCommand(estimator, loader=make_loader(config), line_threshold=cfg["line_threshold"])


def build_classify_command(config):
    cfg = config["classify"]
    classifier = prepared(ClipClassifier(
        labels=cfg["labels"],
        model_name=cfg["model_name"],
        prompt=cfg["prompt"],
    ))
    return ClassifyCommand(classifier, loader=make_loader(config))


def build_embedding_command(config):
    embedder = prepared(ClipEmbedder(model_name=config["embeddings"]["model_name"]))
    return EmbeddingCommand(embedder, loader=make_loader(config))


def build_subject_command(config):
    cfg = config["subject"]
    segmenter = prepared(SubjectSegmenter(iterations=cfg["iterations"], margin=cfg["margin"]))
    return SubjectCommand(segmenter, loader=make_loader(config))


def build_nsfw_command(config):
    classifier = prepared(NsfwClassifier(config["nsfw"]["model"]))
    return NsfwCommand(classifier, loader=make_loader(config))


def optional(name, builder, config):
    """Build a command for `all`; a missing model file drops the section."""
    try:
        return builder(config)
    except ModelUnavailableError as e:
        log(f"Skipping {name}: {e}", tag="WARN")
        return None


def build_all_command(config):
    return AllCommand(
        faces=optional("faces", functools.partial(build_face_command, embeddings=True), config),
        humans=optional("humans", build_human_command, config),
        text=optional("text", build_text_command, config),
        poses=optional("poses", build_pose_command, config),
        classify=optional("classifications", build_classify_command, config),
        embeddings=optional("embedding", build_embedding_command, config),
        minimum_confidence=config["classify"]["minimum_confidence"],
        loader=make_loader(config),
    )


# --------------------------------------------------------------
# Argument parsing


def build_parser():
    parser = argparse.ArgumentParser(
        prog="seev",
        description="A command line wrapper over computer-vision models.",
    )
    parser.add_argument("--version", action="version", version=f"seev {VERSION}")
    parser.add_argument("--config", help="Path to the JSON app config")
    parser.add_argument("--log-file", help="Also append diagnostics to this file")

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    def add(name, help_text, output=True):
        p = sub.add_parser(name, help=help_text, description=help_text)
        p.add_argument("input", help="The filepath or URL of the input image")
        if output:
            p.add_argument("-o", "--output", help="The filepath of the output image")
        return p

    p = add("subject", "Removes the background from an image.")
    p.add_argument("-c", "--cropped", action="store_true",
                   help="Crop the output to the subject's bounding box")
    p.add_argument("--stdout", action="store_true", help="Write the PNG output to stdout")

    p = add("faces", "Detects faces in an image and returns the results as JSON.")
    p.add_argument("-c", "--cropped", action="store_true",
                   help="Crop the output to the largest face bounding box found")
    p.add_argument("-e", "--embeddings", action="store_true",
                   help="Generate embeddings for each face")

    add("humans", "Detects humans in an image and returns the results as JSON.")

    p = add("text", "Detects text in an image and returns the results as JSON.")
    p.add_argument("--custom-words", nargs="+", default=[],
                   help="Custom words to use for text recognition")

    add("poses", "Detects the poses of humans in an image.")

    p = add("classify", "Classifies an image into labels with confidences.", output=False)
    p.add_argument("-m", "--minimum-confidence", type=float, default=None,
                   help="Minimum confidence for predictions (default from config, 0.4)")
    p.add_argument("-i", "--include-identifiers", nargs="+", default=[],
                   help="Identifiers to include even if they don't meet the minimum confidence")

    add("embeddings", "Extracts the embedding of an image and returns it as JSON.", output=False)

    p = sub.add_parser("distance", help="Cosine distance between the embeddings of two images.")
    p.add_argument("a", help="First image (path or URL)")
    p.add_argument("b", help="Second image (path or URL)")

    add("sha1", "Hashes the image using the SHA-1 algorithm.", output=False)
    add("nsfw", "Scores an image with the OpenNSFW model.", output=False)
    add("all", "Performs all analyses on an image and returns the results as JSON.", output=False)

    return parser


def with_default_command(argv):
    """Insert the default subcommand when none is given."""
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in GLOBAL_VALUE_OPTIONS:
            i += 2
            continue
        if token.startswith(tuple(opt + "=" for opt in GLOBAL_VALUE_OPTIONS)):
            i += 1
            continue
        if token in ("-h", "--help", "--version") or token in COMMANDS:
            return argv
        return argv[:i] + [DEFAULT_COMMAND] + argv[i:]
    return argv


# --------------------------------------------------------------
# Dispatch


def run_command(args, config):
    command = args.command

    if command == "subject":
        return build_subject_command(config).run(
            args.input, output=args.output, cropped=args.cropped, stdout=args.stdout
        )
    if command == "faces":
        return build_face_command(config, embeddings=args.embeddings).run(
            args.input, output=args.output, cropped=args.cropped, embeddings=args.embeddings
        )
    if command == "humans":
        return build_human_command(config).run(args.input, output=args.output)
    if command == "text":
        return build_text_command(config).run(
            args.input, output=args.output, custom_words=args.custom_words
        )
    if command == "poses":
        return build_pose_command(config).run(args.input, output=args.output)
    if command == "classify":
        minimum = args.minimum_confidence
        if minimum is None:
            minimum = config["classify"]["minimum_confidence"]
        return build_classify_command(config).run(
            args.input, minimum_confidence=minimum, include_identifiers=args.include_identifiers
        )
    if command == "embeddings":
        return build_embedding_command(config).run(args.input)
    if command == "distance":
        return DistanceCommand(build_embedding_command(config)).run(args.a, args.b)
    if command == "sha1":
        return Sha1Command(timeout=config["http"]["timeout"]).run(args.input)
    if command == "nsfw":
        return build_nsfw_command(config).run(args.input)
    if command == "all":
        return build_all_command(config).run(args.input)

    raise ValueError(f"Unknown command: {command}")


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(with_default_command(argv))

    stderr = sys.stderr
    logger = None
    try:
        config = load_config(args.config)
        log_file = args.log_file or config.get("log_file")
        if log_file:
            logger = install(log_file)
        result = run_command(args, config)
        if result is not None:
            print_json(result)
        return 0
    except KeyboardInterrupt:
        log("Interrupted by user. Exiting...")
        return 130
    except NoSubjectFoundError as e:
        if e.result is not None:
            print_json(e.result)
        log(e, tag="ERROR")
        return 1
    except (SeeVError, ValueError, RuntimeError, OSError, requests.RequestException) as e:
        log(e, tag="ERROR")
        return 1
    finally:
        if logger is not None:
            sys.stderr = stderr
            logger.close()


if __name__ == "__main__":
    sys.exit(main())
