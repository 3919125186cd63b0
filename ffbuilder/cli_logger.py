import datetime
import sys
import traceback
import os
from colorama import Fore, Style, init

# Initialize Colorama
init(autoreset=True)

LOG_DIR = os.environ.get(
    "FFBUILDER_LOG_DIR",
    os.path.join(os.path.expanduser("~"), ".ffbuilder", "logs"),
)
os.makedirs(LOG_DIR, exist_ok=True)

# level -> (color, symbol, goes to stderr)
LEVELS = {
    "INFO": (Fore.CYAN, "", False),
    "SUCCESS": (Fore.GREEN, "✓ ", False),
    "WARNING": (Fore.YELLOW, "⚠ ", True),
    "ERROR": (Fore.RED, "✖ ", True),
    "DEBUG": (Fore.WHITE + Style.DIM, "", False),
    "TRACEBACK": (Fore.RED, ">> ", True),
}


class Logger:
    """Console logger for ffbuilder runs; every line is also kept in a log file."""

    def __init__(self):
        self.log_file = os.path.join(
            LOG_DIR,
            f"ffbuilder_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        )

    def _write_file(self, line):
        with open(self.log_file, "a") as f:
            f.write(line + "\n")

    def _log(self, level, message):
        color, symbol, to_stderr = LEVELS[level]
        timestamp = datetime.datetime.now().strftime("%H:%M:%S")
        stream = sys.stderr if to_stderr else sys.stdout
        prefix = f"{Style.BRIGHT}{symbol}{Style.RESET_ALL}{color}" if symbol else ""
        print(f"{color}{Style.BRIGHT}[{timestamp}]{Style.RESET_ALL} {color}{prefix}{message}{Style.RESET_ALL}", file=stream)
        self._write_file(f"[{timestamp}] [{level}] {symbol}{message}")

    def info(self, message):
        self._log("INFO", message)

    def success(self, message):
        self._log("SUCCESS", message)

    def warning(self, message):
        self._log("WARNING", message)

    def error(self, message):
        self._log("ERROR", message)

    def debug(self, message):
        self._log("DEBUG", message)

    def step_info(self, message, indent=0):
        line = " " * indent + message
        print(f"{Fore.CYAN}{line}{Style.RESET_ALL}")
        self._write_file(line)

    def listing(self, title, items, indent=2):
        """Log ``title`` followed by one indented line per item, e.g. configure flags."""
        self.info(title)
        for item in items:
            self.step_info(item, indent=indent)

    def exception(self, exc_type, exc_value, exc_traceback):
        self.error(f"An unhandled exception occurred: {exc_value}")
        for chunk in traceback.format_exception(exc_type, exc_value, exc_traceback):
            for line in chunk.splitlines():
                if line.strip():
                    self._log("TRACEBACK", line)


logger = Logger()

def get_latest_log_file():
    """Return the path to the latest log file."""
    log_files = [os.path.join(LOG_DIR, f) for f in os.listdir(LOG_DIR) if f.endswith(".log")]
    if not log_files:
        return None
    return max(log_files, key=os.path.getctime)
