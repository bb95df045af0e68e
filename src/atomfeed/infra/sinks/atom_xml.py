"""Atom XML Output Sink for publishing feeds as Atom XML files."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class AtomXMLOutputSink:
    """Publishes a serialized feed as an Atom XML file.

    Implements the OutputSink protocol.
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the Atom XML output sink.

        Args:
            output_path: Path where the Atom XML file will be written

        """
        self.output_path = Path(output_path)

    def publish(self, xml: str) -> None:
        """Publish the feed as an Atom XML file.

        Args:
            xml: The serialized feed document

        Creates parent directories if they don't exist.
        Overwrites existing file if present.

        """
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(xml, encoding="utf-8")
        logger.info("Wrote feed to %s", self.output_path)
