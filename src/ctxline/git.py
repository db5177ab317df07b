"""Discover git state of the session's working directory."""

import logging
import subprocess

from ctxline.config import DEFAULT_GIT_TIMEOUT
from ctxline.models import GitStatus

logger = logging.getLogger(__name__)


def get_current_branch(cwd: str, timeout: float = DEFAULT_GIT_TIMEOUT) -> str:
    """Query git for the branch checked out in cwd.

    Args:
        cwd: Directory to run git in
        timeout: Seconds to wait for git before giving up

    Returns:
        The branch name, trimmed of whitespace. Empty when HEAD is detached.
        Bytes that are not valid UTF-8 are replaced.

    Raises:
        OSError: If git cannot be started or cwd does not exist
        subprocess.TimeoutExpired: If git does not finish within timeout
        subprocess.CalledProcessError: If git exits non-zero
    """
    result = subprocess.run(
        ["git", "branch", "--show-current"],
        cwd=cwd,
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout,
        check=True,
    )
    return result.stdout.strip()


def get_git_status(cwd: str, timeout: float = DEFAULT_GIT_TIMEOUT) -> GitStatus:
    """Get the git status for cwd, treating every failure as "no branch".

    Not being in a repository, a missing git binary, a missing directory
    and a timeout all produce a GitStatus without a branch.
    """
    if not cwd:
        return GitStatus()

    try:
        branch = get_current_branch(cwd, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.debug("git timed out after %ss in %s", timeout, cwd)
        return GitStatus()
    except subprocess.CalledProcessError as e:
        logger.debug("git exited with %d in %s: %s", e.returncode, cwd, (e.stderr or "").strip())
        return GitStatus()
    except OSError as e:
        logger.debug("could not run git in %s: %s", cwd, e)
        return GitStatus()

    return GitStatus(branch=branch or None)
