"""
Forensic artifacts captured at every attempt boundary.
"""
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from checkin.browser import BrowserSession
from checkin.checkin_models import Artifact, ArtifactKind
from checkin.utils import get_artifact_path

logger = logging.getLogger(__name__)


class ArtifactCollector:
    """
    Captures the page body and a screenshot for each attempt of one run.

    Artifacts are only ever appended; the full list is handed to the
    reporter once the run is over.
    """

    def __init__(self, artifact_dir: Union[str, Path]) -> None:
        self.artifact_dir = Path(artifact_dir)
        self._artifacts: List[Artifact] = []

    @property
    def artifacts(self) -> Tuple[Artifact, ...]:
        return tuple(self._artifacts)

    def capture_attempt(self, session: Optional[BrowserSession], run_id: str,
                        attempt_number: int, note: Optional[str] = None) -> List[Artifact]:
        """
        Capture the page body and a screenshot for an attempt.

        Each capture is tried on its own. A failure is logged and the other
        capture still runs; nothing is raised to the caller. An attempt that
        never got a browser session leaves a text note instead, so every
        attempt is represented in the report.

        Args:
            session: The attempt's browser session, or None if it never opened
            run_id: Identifier shared by every file of the run
            attempt_number: The attempt being captured
            note: What went wrong, written to the note when there is no session

        Returns:
            The artifacts captured by this call
        """
        if session is None:
            captures = (self._capture_note,)
        else:
            captures = (self._capture_page, self._capture_screenshot)

        captured = []
        for capture in captures:
            artifact = capture(session, run_id, attempt_number, note)
            if artifact is not None:
                self._artifacts.append(artifact)
                captured.append(artifact)
        return captured

    def _capture_note(self, session: None, run_id: str, attempt_number: int,
                      note: Optional[str]) -> Optional[Artifact]:
        logger.warning(f"No browser session for attempt #{attempt_number}, writing a note instead")
        try:
            note_path = get_artifact_path(self.artifact_dir, "checkin", run_id, attempt_number, "txt")
            note_path.write_text(
                f"Attempt #{attempt_number} had no browser session to capture.\n"
                f"{note or 'No error recorded'}\n",
                encoding="utf-8",
            )
        except Exception as e:
            logger.error(f"Failed to write note for attempt #{attempt_number}: {e}")
            return None
        return Artifact(ArtifactKind.LOG_FILE, attempt_number, note_path)

    def _capture_page(self, session: BrowserSession, run_id: str, attempt_number: int,
                      note: Optional[str]) -> Optional[Artifact]:
        try:
            html_path = get_artifact_path(self.artifact_dir, "checkin", run_id, attempt_number, "html")
            logger.debug(f"Capturing page... {html_path}")
            html_path.write_text(session.capture_body(), encoding="utf-8")
        except Exception as e:
            logger.error(f"Failed to capture page for attempt #{attempt_number}: {e}")
            return None
        return Artifact(ArtifactKind.PAGE_SNAPSHOT, attempt_number, html_path)

    def _capture_screenshot(self, session: BrowserSession, run_id: str, attempt_number: int,
                            note: Optional[str]) -> Optional[Artifact]:
        try:
            screenshot_path = get_artifact_path(self.artifact_dir, "screenshot", run_id, attempt_number, "png")
            logger.debug(f"Capturing screenshot... {screenshot_path}")
            screenshot_path.write_bytes(session.capture_screenshot())
        except Exception as e:
            logger.error(f"Failed to capture screenshot for attempt #{attempt_number}: {e}")
            return None
        return Artifact(ArtifactKind.SCREENSHOT, attempt_number, screenshot_path)
