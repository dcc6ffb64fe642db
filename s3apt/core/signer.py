# s3apt/core/signer.py
"""Detached and clearsign signing through gpg"""

import logging
import subprocess
from pathlib import Path
from typing import List

from ..api.exceptions import SigningError
from ..models.config import SigningConfig
from ..utils.async_utils import run_in_executor

logger = logging.getLogger(__name__)


class GpgSigner:
    """Runs the gpg binary to sign a local file"""

    def __init__(self, config: SigningConfig):
        self.config = config

    @staticmethod
    def signature_path(path: Path, clearsign: bool = False) -> Path:
        """Where gpg leaves the artifact for ``path``"""
        path = Path(path)
        suffix = ".signed" if clearsign else ".asc"
        return path.with_name(path.name + suffix)

    def build_command(self, path: Path, clearsign: bool = False) -> List[str]:
        """
        Build the gpg command line

        Args:
            path: File to sign
            clearsign: Produce a clearsigned copy instead of a detached signature

        Returns:
            Argument list
        """
        cmd = [self.config.gpg_binary, "-a"]
        if self.config.key:
            cmd.append(f"--default-key={self.config.key}")
        cmd.extend(self.config.option_args)

        if clearsign:
            cmd.extend(["--clearsign", "-o", str(self.signature_path(path, True))])
        else:
            cmd.append("-b")

        cmd.append(str(path))
        return cmd

    async def sign(self, path: Path, clearsign: bool = False) -> Path:
        """
        Sign a file

        Args:
            path: File to sign
            clearsign: Produce a clearsigned copy instead of a detached signature

        Returns:
            Path of the produced artifact

        Raises:
            SigningError: If gpg fails or leaves no artifact
        """
        cmd = self.build_command(path, clearsign)
        logger.debug(f"Signing {path}: {' '.join(cmd)}")

        def _run():
            try:
                return subprocess.run(cmd, capture_output=True, text=True)
            except (FileNotFoundError, PermissionError) as e:
                raise SigningError(f"Unable to run {self.config.gpg_binary}: {e}") from e

        result = await run_in_executor(_run)
        if result.returncode != 0:
            raise SigningError(
                f"Signing the {Path(path).name} file failed: {result.stderr.strip()}"
            )

        artifact = self.signature_path(path, clearsign)
        if not artifact.exists():
            raise SigningError(f"Unable to locate {Path(path).name} signature file")

        return artifact
