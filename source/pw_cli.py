# pw_cli.py
from __future__ import annotations

import json
import subprocess
from typing import Any, List, Sequence

from audio_system import AudioSystemError


def _run(cmd: Sequence[str], timeout: float = 5.0) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(list(cmd), capture_output=True, text=True, timeout=timeout)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise AudioSystemError(f"{cmd[0]} could not be run: {e}") from e


def pw_dump_json() -> List[Any]:
    p = _run(["pw-dump"])
    if p.returncode != 0:
        msg = (p.stderr or p.stdout).strip()
        raise AudioSystemError(f"pw-dump failed: {msg}")

    try:
        data = json.loads(p.stdout)
    except Exception as e:
        raise AudioSystemError(f"pw-dump output is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise AudioSystemError("pw-dump output JSON is not a list")

    return data
