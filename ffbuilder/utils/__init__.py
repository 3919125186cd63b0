from .command_executor import run_shell_command
from .flag_list import FlagList
