"""
Interactive prompts on the console.
"""

from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple, Union, Any

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()

# A validator returns True when the answer is acceptable, or an error message.
Validator = Callable[[str], Union[bool, str]]
Choice = Tuple[str, Any]

class ConsolePrompter:
    """Asks questions on stdin/stdout.

    Every method returns ``None`` when the user aborts with Ctrl-C or
    closes stdin, which callers treat as a cancel.
    """

    def __init__(self, input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        self._input = input_func
        self._print = output_func

    def _ask(self, message: str) -> Optional[str]:
        try:
            return self._input(f"{Fore.CYAN}?{Style.RESET_ALL} {message} ")
        except (EOFError, KeyboardInterrupt):
            self._print("")
            return None

    def text(self, message: str, validate: Optional[Validator] = None) -> Optional[str]:
        """Ask for a line of text, re-asking until ``validate`` accepts it."""
        while True:
            answer = self._ask(message)
            if answer is None:
                return None
            answer = answer.strip()
            if validate is None:
                return answer
            result = validate(answer)
            if result is True:
                return answer
            self._print(f"{Fore.RED}{result}{Style.RESET_ALL}")

    def select(self, message: str, choices: Sequence[Choice], default: int = 0) -> Optional[Any]:
        """Pick one of ``choices`` (title, value) by number."""
        self._print(f"{Fore.CYAN}?{Style.RESET_ALL} {Style.BRIGHT}{message}{Style.RESET_ALL}")
        for i, (title, _) in enumerate(choices):
            marker = f"{Fore.GREEN}>{Style.RESET_ALL}" if i == default else " "
            self._print(f"  {marker} {i + 1}. {title}")

        while True:
            answer = self._ask(f"Enter number [{default + 1}]:")
            if answer is None:
                return None
            answer = answer.strip()
            if not answer:
                return choices[default][1]
            try:
                selection = int(answer)
            except ValueError:
                self._print(f"{Fore.RED}Please enter a valid number{Style.RESET_ALL}")
                continue
            if 1 <= selection <= len(choices):
                return choices[selection - 1][1]
            self._print(f"{Fore.RED}Invalid selection{Style.RESET_ALL}")

    def confirm(self, message: str, default: bool = False) -> Optional[bool]:
        """Ask a yes/no question."""
        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._ask(f"{message} ({hint})")
            if answer is None:
                return None
            answer = answer.strip().lower()
            if not answer:
                return default
            if answer in ('y', 'yes'):
                return True
            if answer in ('n', 'no'):
                return False
            self._print(f"{Fore.RED}Please answer y or n{Style.RESET_ALL}")

def directory_validator(value: str) -> Union[bool, str]:
    """Accept an empty answer (cancel) or an existing directory."""
    if value.strip() == '':
        return True
    return True if Path(value).is_dir() else 'Directory not found.'
