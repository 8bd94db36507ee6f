"""
Builds and sends the single end-of-run report.
"""
import logging
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, Union

from checkin.checkin_models import (
    Artifact,
    ArtifactKind,
    NotificationMessage,
    RunContext,
    TravelerCredential,
)

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    """Anything that can deliver a subject, a body and file attachments."""

    def is_configured(self) -> bool: ...

    def send(self, subject: str, body: str, attachments: Sequence[Tuple[str, bytes]]) -> bool: ...


class RunReporter:
    """
    Turns a finished run into a NotificationMessage and sends it.

    Sending is best-effort: an unconfigured sender means nothing is sent,
    and a failing sender is logged. Neither changes the run outcome.
    """

    def __init__(
        self,
        traveler: TravelerCredential,
        sender: Optional[NotificationSender] = None,
        log_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self.traveler = traveler
        self.sender = sender
        self.log_path = Path(log_path) if log_path else None

    def finalize(self, context: RunContext, artifacts: Sequence[Artifact]) -> NotificationMessage:
        """
        Build the report for a finished run and hand it to the sender.

        Args:
            context: The finalized run context
            artifacts: Every artifact captured during the run, in attempt order

        Returns:
            The message that was (or would have been) sent
        """
        message = self.build_message(context, artifacts)

        if self.sender is None or not self.sender.is_configured():
            logger.info("Email notifications not configured, skipping report")
            return message

        attachments = self._read_attachments(message.attachments)
        logger.info(f"Sending report '{message.subject}' with {len(attachments)} attachment(s)")
        try:
            self.sender.send(message.subject, message.body, attachments)
        except Exception as e:
            logger.error(f"Failed to send report: {e}", exc_info=True)
        return message

    def build_message(self, context: RunContext, artifacts: Sequence[Artifact]) -> NotificationMessage:
        attachments: List[Artifact] = sorted(artifacts, key=lambda a: a.attempt_number)
        if self.log_path is not None:
            attachments.append(Artifact(ArtifactKind.LOG_FILE, context.attempts_made, self.log_path))

        return NotificationMessage(
            subject=self.format_subject(context),
            body=self.format_body(context),
            attachments=attachments,
        )

    def format_subject(self, context: RunContext) -> str:
        if context.success:
            return f"Check In Completed for {self.traveler.first_name}"
        return f"Check In Failed for {self.traveler.first_name}"

    def format_body(self, context: RunContext) -> str:
        status = "Completed" if context.success else "Failed"
        lines = [
            "This email was generated automatically by a bot",
            "Please see attached results",
            "",
            f"Status: {status}",
            f"Confirmation: {self.traveler.confirmation}",
            f"Run: {context.run_id}",
            f"Started: {context.started_at:%Y-%m-%d %H:%M:%S}",
            f"Attempts made: {context.attempts_made} of {context.max_attempts}",
        ]
        if context.failures:
            lines.append("")
            lines.append("Errors:")
            for failure in context.failures:
                lines.append(f"  Attempt #{failure.attempt_number} ({failure.kind}): {failure.message}")
        return "\n".join(lines) + "\n"

    def _read_attachments(self, artifacts: Sequence[Artifact]) -> List[Tuple[str, bytes]]:
        attachments = []
        for artifact in artifacts:
            try:
                attachments.append((artifact.name, artifact.path.read_bytes()))
            except OSError as e:
                logger.warning(f"Could not read attachment {artifact.path}: {e}")
        return attachments
