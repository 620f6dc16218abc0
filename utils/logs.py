import os
import sys


class Logger(object):
    """
    Tee stream: everything written goes to the terminal and to a log file.
    Installed over sys.stderr so stdout stays reserved for JSON / image bytes.
    """

    def __init__(self, log_file="logs/seev.log", terminal=None):
        self.terminal = terminal if terminal is not None else sys.stderr
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        self.log = open(log_file, "a")

    def write(self, message):
        self.terminal.write(message)
        self.log.write(message)
        self.log.flush()

    def flush(self):
        self.terminal.flush()
        self.log.flush()

    def close(self):
        self.log.close()


def install(log_file):
    """Redirect stderr through a Logger writing to `log_file`."""
    logger = Logger(log_file, terminal=sys.stderr)
    sys.stderr = logger
    return logger


def log(message, tag="INFO"):
    print(f"[{tag}] {message}", file=sys.stderr)
