"""Parser for container identifiers printed by `docker run -d`."""

from __future__ import annotations

from detee.constants import CONTAINER_ID_LENGTHS
from detee.models import ContainerIdRecord, OutputShape, RawOutput

from .base import BaseParser


class ContainerIdParser(BaseParser):
    """Treat text of a full (64) or short (12) container id length as the id.

    Any other string of exactly that length is misclassified as well; the
    length test is the only signal the container runtime gives us.
    """

    name = "container_id"
    shape = OutputShape.CONTAINER_ID

    @classmethod
    def detect(cls, text: str) -> bool:
        return len(text.strip()) in CONTAINER_ID_LENGTHS

    def parse(self, raw: RawOutput) -> ContainerIdRecord:
        return ContainerIdRecord(container_id=raw.text.strip())
