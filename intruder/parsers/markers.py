"""Payload marker handling for raw request templates.

Two marking conventions coexist:
  1. Selection markers (``§``) inserted around text the user highlights.
  2. Payload markers (``$`` by default) recovered by ``extract``.
"""

from typing import List, Optional

from intruder.core.models import PayloadPosition


SELECTION_MARKER = "§"
PAYLOAD_MARKER = "$"


def wrap(template: str, selection: str) -> str:
    """Surround the first occurrence of *selection* with selection markers.

    Later occurrences are left alone. A selection that does not occur in
    *template* returns *template* itself.
    """
    if selection not in template:
        return template
    return template.replace(
        selection, f"{SELECTION_MARKER}{selection}{SELECTION_MARKER}", 1)


def clear_markers(template: str) -> str:
    """Strip every selection marker, paired or not."""
    return template.replace(SELECTION_MARKER, "")


def _infer_param_name(before: str) -> Optional[str]:
    lines = before.strip()
    last_line = lines[lines.rfind("\n") + 1:]

    # Header line: "Name: value"
    if ":" in last_line:
        return last_line.split(":", 1)[0].strip()
    # Query string / form field: "name=value"
    if "=" in last_line:
        return last_line.split("=", 1)[0].strip()
    return None


def extract(text: str, marker: str = PAYLOAD_MARKER) -> List[PayloadPosition]:
    """Return the marker pairs of *text* as ordered payload positions.

    The scan stops at the first marker without a partner; markers do not
    nest, the next marker after an opening one always closes it.
    """
    if not marker:
        raise ValueError("Payload marker must not be empty.")

    positions: List[PayloadPosition] = []
    width = len(marker)
    start = text.find(marker)

    while start != -1:
        close = text.find(marker, start + width)
        if close == -1:
            break

        positions.append(PayloadPosition(
            start=start,
            end=close + width,
            value=text[start + width:close],
            param_name=_infer_param_name(text[:start]),
            index=len(positions),
        ))
        start = text.find(marker, close + width)

    return positions
