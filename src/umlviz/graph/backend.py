"""Render backends turning DOT descriptions into image files."""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    """Raised when the renderer fails to produce an image.

    Attributes:
        output_path: Image file that was requested
        returncode: Exit status of the renderer, None if it never ran to completion
        output: Diagnostic output captured from the renderer
    """

    def __init__(self, message: str, output_path: Path, returncode: int | None = None, output: str = ""):
        super().__init__(message)
        self.output_path = output_path
        self.returncode = returncode
        self.output = output

    def __str__(self) -> str:
        text = super().__str__()
        if self.output:
            text += f"\n{self.output.strip()}"
        return text


class RenderBackend(ABC):
    """Abstract base class for render backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the backend."""
        pass

    @abstractmethod
    def render(self, description: str, output_path: Path) -> None:
        """Render a DOT description into output_path.

        Raises:
            RenderError: If the image could not be produced
        """
        pass


class GraphvizBackend(RenderBackend):
    """Renders through the Graphviz ``dot`` executable.

    The description is passed on standard input and the target path as the
    ``-o`` argument.
    """

    def __init__(self, command: str = "dot", image_format: str = "png", timeout: float | None = None):
        self.command = command
        self.image_format = image_format
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "graphviz"

    def build_command(self, output_path: Path) -> list[str]:
        return [self.command, f"-T{self.image_format}", "-o", str(output_path)]

    def render(self, description: str, output_path: Path) -> None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        cmd = self.build_command(output_path)
        logger.debug(f"Running {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                input=description,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise RenderError(
                f"Renderer '{self.command}' not found; install Graphviz", output_path
            ) from e
        except subprocess.TimeoutExpired as e:
            raise RenderError(
                f"Renderer timed out after {self.timeout}s rendering {output_path}",
                output_path,
                output=_decode(e.stderr),
            ) from e

        if result.returncode != 0:
            raise RenderError(
                f"Renderer exited with status {result.returncode} rendering {output_path}",
                output_path,
                returncode=result.returncode,
                output=result.stderr or result.stdout,
            )


def _decode(output: str | bytes | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output
