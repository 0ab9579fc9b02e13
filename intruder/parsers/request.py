from typing import Dict, List
from urllib.parse import urlsplit

from intruder.core.models import PayloadPosition
from intruder.parsers import markers


class RequestTemplate:
    def __init__(self, requestFilename: str) -> None:
        """
        GET /users/§1§ HTTP/1.1
        Host: example.com
        X-Token: $abc$

        id=$123$
        """

        self.raw = ""
        self.method = ""
        self.path = ""
        self.host = ""
        self.headers = {}

        self.requestFilename = requestFilename

    def load(self) -> str:
        # Offsets of extracted positions refer to the text as stored on
        # disk, so line endings are kept as they are.
        with open(self.requestFilename, 'r', encoding='utf-8', errors='ignore', newline='') as f:
            self.raw = f.read()

        if not self.raw.strip():
            raise ValueError("Request file is empty.")

        head = self.raw.replace("\r\n", "\n").partition("\n\n")[0]
        if not head.strip():
            raise ValueError("Request file has no request line before the first blank line.")
        lines = [l for l in head.split("\n") if l.strip()]

        # Request line: METHOD SP PATH [SP HTTP/x.y]
        parts0 = lines[0].split()
        if len(parts0) < 2:
            raise ValueError(f"Invalid request line: {lines[0]!r}")
        self.method = parts0[0]
        self.path = urlsplit(parts0[1]).path

        self.headers = {}
        for line in lines[1:]:
            if ':' in line:
                k, v = line.split(':', 1)
                self.headers[k.strip()] = v.strip()

        self.host = self.headers.get('Host', self.headers.get('host', ''))
        return self.raw

    def summary(self) -> Dict:
        return {
            'host': self.host,
            'method': self.method,
            'path': self.path,
            'headers': self.headers,
        }

    def positions(self, marker: str = markers.PAYLOAD_MARKER) -> List[PayloadPosition]:
        return markers.extract(self.raw, marker)

    def wrap(self, selection: str) -> str:
        self.raw = markers.wrap(self.raw, selection)
        return self.raw

    def clear(self) -> str:
        self.raw = markers.clear_markers(self.raw)
        return self.raw

    def __str__(self) -> str:
        return f"Method: {self.method}\nPath: {self.path}\nHost: {self.host}\nHeaders: {self.headers}"
