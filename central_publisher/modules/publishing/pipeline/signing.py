"""Detached signature capability."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Protocol

from central_publisher.modules.publishing.domain import SigningError
from central_publisher.modules.publishing.domain.constants import SIGNATURE_EXTENSION


class Signer(Protocol):
    """Signs ``path`` and returns the path of the detached signature."""

    def sign(self, path: Path) -> Path:  # pragma: no cover - interface
        ...


def signature_path(path: Path) -> Path:
    return path.with_name(f"{path.name}.{SIGNATURE_EXTENSION}")


class GpgSigner:
    """Create ASCII-armoured detached signatures with the gpg executable."""

    def __init__(
        self,
        executable: str = "gpg",
        key_id: Optional[str] = None,
        passphrase: Optional[str] = None,
        timeout: Optional[float] = 120,
    ) -> None:
        self.executable = executable
        self.key_id = key_id
        self.passphrase = passphrase
        self.timeout = timeout
        self.log = logging.getLogger(self.__class__.__name__)

    def _build_command(self, path: Path, target: Path) -> List[str]:
        cmd = [self.executable, "--batch", "--yes", "--armor", "--detach-sign"]
        if self.key_id:
            cmd += ["--local-user", self.key_id]
        if self.passphrase:
            cmd += ["--pinentry-mode", "loopback", "--passphrase-fd", "0"]
        cmd += ["--output", str(target), str(path)]
        return cmd

    def sign(self, path: Path) -> Path:
        path = Path(path)
        target = signature_path(path)
        cmd = self._build_command(path, target)
        self.log.info("Signing %s", path.name)
        try:
            completed = subprocess.run(
                cmd,
                input=self.passphrase,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise SigningError(f"cannot run {self.executable} for {path}: {exc}") from exc
        if completed.returncode != 0:
            raise SigningError(f"signing {path} failed ({completed.returncode}): {(completed.stderr or '').strip()}")
        return target
