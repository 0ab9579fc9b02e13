from colorama import init as colorama_init, Fore, Style
from datetime import datetime

from intruder.core.colors import DEFAULT_COLOR
colorama_init(autoreset=True)

# Highlight color ids mapped to the closest terminal color
_ROW_COLORS = {
    DEFAULT_COLOR: Fore.BLUE,
    "red": Fore.RED,
    "green": Fore.GREEN,
    "blue": Fore.CYAN,
    "yellow": Fore.YELLOW,
    "orange": Fore.LIGHTRED_EX,
    "teal": Fore.LIGHTCYAN_EX,
}


class Log:
    def __init__(self, verbose: int = 1):
        self.verbose = verbose
        self.PAY = Fore.MAGENTA

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {color}[{level}]{Style.RESET_ALL}"

    def info(self, msg: str):
        if self.verbose >= 1:
            print(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            print(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        print(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        print(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def error(self, msg: str):
        print(f"{self._fmt('ERROR', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            print(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    def position(self, pos):
        name = pos.param_name or "-"
        print(f"{self._fmt('POSITION', Fore.CYAN)} #{pos.index} "
              f"{name} = {self.PAY}{pos.value}{Style.RESET_ALL} "
              f"{Style.DIM}[{pos.start}:{pos.end}]{Style.RESET_ALL}")

    def result(self, res):
        row_col = _ROW_COLORS.get(res.color or DEFAULT_COLOR, Fore.WHITE)
        payload = ", ".join(res.payload)
        print(f"{self._fmt('RESULT', row_col)} {res.id} "
              f"{Fore.MAGENTA}{payload}{Style.RESET_ALL} "
              f"{Style.DIM}(HTTP {res.status}, {res.length} bytes, {res.time_ms} ms){Style.RESET_ALL}")
