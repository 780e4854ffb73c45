"""Puzzle input acquisition.

Inputs come from a local file when one is given, otherwise they are
downloaded from the puzzle site using the session cookie found in the
``ADVENT_OF_CODE_SESSION`` environment variable.
"""

from __future__ import annotations

import os
from pathlib import Path

import requests

from puzzlebench import __version__
from puzzlebench.errors import InputError
from puzzlebench.logging import get_logger
from puzzlebench.puzzle import Puzzle

log = get_logger("inputs")

SESSION_ENV_VAR = "ADVENT_OF_CODE_SESSION"
_USER_AGENT = f"puzzlebench/{__version__}"


def read_input(path: Path) -> str:
    """Read a puzzle input from *path*."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise InputError(f"Input file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Could not read input file {path}: {exc}") from exc


def fetch_input(puzzle: Puzzle, session: str, *, timeout: float = 10.0) -> str:
    """Download the personal input for *puzzle*.

    Args:
        puzzle: The puzzle whose input to fetch.
        session: Value of the site's ``session`` cookie.
        timeout: HTTP request timeout in seconds.

    Raises:
        InputError: On connection problems or a non-200 response.
    """
    url = puzzle.input_url
    log.debug("Fetching %s", url)
    try:
        resp = requests.get(
            url,
            timeout=timeout,
            headers={"User-Agent": _USER_AGENT},
            cookies={"session": session},
        )
    except requests.ConnectionError as exc:
        raise InputError(f"Connection error fetching {url}") from exc
    except requests.Timeout as exc:
        raise InputError(f"Timeout fetching {url}") from exc
    except requests.RequestException as exc:
        raise InputError(f"Request error fetching {url}: {exc}") from exc

    if resp.status_code == 404:
        raise InputError(f"{puzzle.header}: input not available yet (404)")
    if resp.status_code in (400, 500):
        raise InputError(f"Session rejected fetching {url} ({resp.status_code}); is it expired?")
    if resp.status_code != 200:
        raise InputError(f"Unexpected status {resp.status_code} fetching {url}")

    return resp.text


def load_input(
    puzzle: Puzzle,
    *,
    input_file: Path | None = None,
    session: str | None = None,
    timeout: float = 10.0,
) -> str:
    """Load the input for *puzzle* from *input_file* or the network.

    The session defaults to the ``ADVENT_OF_CODE_SESSION`` environment
    variable.
    """
    if input_file is not None:
        text = read_input(input_file)
    else:
        session = session or os.environ.get(SESSION_ENV_VAR)
        if not session:
            raise InputError(
                f"No input file given and {SESSION_ENV_VAR} is not set; "
                "pass --input or export the session cookie"
            )
        text = fetch_input(puzzle, session, timeout=timeout)

    log.info("Got %d bytes of input", len(text.encode("utf-8")))
    return text
