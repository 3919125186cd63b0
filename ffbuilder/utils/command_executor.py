import subprocess
from ..cli_logger import logger

def run_shell_command(command, stream_output=False, env=None, input_data=None, cwd=None):
    """
    Executes a command, with options for streaming output and providing input.

    Args:
        command (list): The command to execute as a list of strings.
        stream_output (bool): If True, streams the output in real-time.
        env (dict, optional): A dictionary of environment variables.
        input_data (str, optional): Data to be passed to the command's stdin.
        cwd (str, optional): The working directory for the command.

    Returns:
        If stream_output is True, returns a tuple (line generator, process).
        If stream_output is False, returns a tuple (stdout, stderr, return_code).

    Raises:
        FileNotFoundError: If the executable itself cannot be found. Callers
            decide whether a missing tool is fatal.
    """
    if stream_output:
        process = subprocess.Popen(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            bufsize=1,
            universal_newlines=True,
            env=env,
            cwd=cwd
        )

        def _generator():
            for line in process.stdout:
                yield line
            process.communicate()
        return _generator(), process

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            env=env,
            input=input_data,
            check=False,
            cwd=cwd
        )
    except PermissionError as e:
        logger.debug(f"Permission denied running {command[0]}: {e}")
        return "", str(e), -1
    return result.stdout, result.stderr, result.returncode
