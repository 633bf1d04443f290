"""Process identity and fire-and-forget spawning."""

import logging
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = (".py", ".pyw")


def is_frozen() -> bool:
    """True when running from a bundled executable (PyInstaller and friends)."""
    return bool(getattr(sys, "frozen", False))


def current_executable() -> tuple[str, str | None]:
    """Locate the running program.

    Returns:
        ``(path, interpreter)``. For bundled executables the path is the
        binary itself and interpreter is None; for scripts the path is the
        absolute script and interpreter is ``sys.executable``.
    """
    if is_frozen():
        return str(Path(sys.executable).resolve()), None
    return str(Path(sys.argv[0]).resolve()), sys.executable


def current_arguments() -> list[str]:
    """Command-line arguments of this process, program name excluded."""
    return list(sys.argv[1:])


def base_directory(executable: str) -> str:
    """Directory holding the managed executable."""
    return str(Path(executable).resolve().parent)


def build_command(executable: str, args: list[str], interpreter: str | None = None) -> list[str]:
    """Build the argv used to start ``executable``.

    Scripts are run through ``interpreter``; when none is known the current
    interpreter is used.
    """
    cmd = [executable, *args]
    if interpreter:
        return [interpreter, *cmd]
    if Path(executable).suffix.lower() in SCRIPT_SUFFIXES:
        return [sys.executable, *cmd]
    return cmd


def spawn_detached(cmd: list[str]) -> None:
    """Start ``cmd`` and forget about it.

    The child gets its own session/process group so it outlives the caller;
    no handle is kept and nothing waits for it.
    """
    kwargs: dict = {"close_fds": True}
    if sys.platform.startswith("win"):
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True

    logger.info("Starting process: %s", cmd[0])
    logger.debug("Full command: %s", cmd)
    subprocess.Popen(cmd, **kwargs)
