from collections.abc import Mapping
from itertools import product
from math import prod
from typing import Any, List, Sequence

from colorama import Style

from intruder.core.models import AttackRequest, PayloadPosition
from intruder.core.normalizer import normalize_payload_sets
from intruder.parsers.markers import SELECTION_MARKER, extract

MAX_REQUESTS = 1000
ATTACK_TYPES = ("sniper", "battering-ram", "pitchfork", "cluster-bomb")


class Engine:
    def __init__(self, logger=None, max_requests: int = MAX_REQUESTS):
        self.logger = logger
        self.max_requests = max_requests

    # ---------- payload helpers ----------
    @staticmethod
    def _items(payload_sets: Sequence[Any]) -> List[List[str]]:
        """Payload lists from plain sequences or {"type", "items"} descriptors."""
        sets = []
        for entry in normalize_payload_sets(payload_sets):
            if isinstance(entry, Mapping):
                entry = entry.get("items") or []
            if isinstance(entry, str):
                entry = [entry]
            sets.append([str(p) for p in entry])
        return sets

    @staticmethod
    def _render(template: str, positions: List[PayloadPosition], values: Sequence[str]) -> str:
        """Splice *values* into *positions*; missing values keep the original text."""
        out = []
        last = 0
        for pos in positions:
            out.append(template[last:pos.start])
            out.append(values[pos.index] if pos.index < len(values) else pos.value)
            last = pos.end
        out.append(template[last:])
        return "".join(out)

    @staticmethod
    def _count(attack_type: str, positions: List[PayloadPosition], sets: List[List[str]]) -> int:
        flat = sum(len(items) for items in sets)
        if attack_type == "sniper":
            return len(positions) * flat
        if attack_type == "battering-ram":
            return flat
        if attack_type == "pitchfork":
            return min(len(items) for items in sets)
        return prod(len(items) for items in sets)
    # -------------------------------------

    def _sniper(self, template, positions, sets):
        flat = [p for items in sets for p in items]
        originals = [pos.value for pos in positions]
        requests = []
        for pos in positions:
            for payload in flat:
                values = list(originals)
                values[pos.index] = payload
                requests.append(AttackRequest(
                    id=len(requests) + 1,
                    request=self._render(template, positions, values),
                    payload=values))
        return requests

    def _battering_ram(self, template, positions, sets):
        flat = [p for items in sets for p in items]
        return [
            AttackRequest(
                id=i + 1,
                request=self._render(template, positions, [payload] * len(positions)),
                payload=[payload])
            for i, payload in enumerate(flat)
        ]

    def _pitchfork(self, template, positions, sets):
        rounds = min(len(items) for items in sets)
        requests = []
        for i in range(rounds):
            values = [items[i] for items in sets[:len(positions)]]
            requests.append(AttackRequest(
                id=i + 1,
                request=self._render(template, positions, values),
                payload=values))
        return requests

    def _cluster_bomb(self, template, positions, sets):
        return [
            AttackRequest(
                id=i + 1,
                request=self._render(template, positions, combo[:len(positions)]),
                payload=list(combo[:len(positions)]))
            for i, combo in enumerate(product(*sets))
        ]

    def generate(self, template: str, payload_sets: Sequence[Any], attack_type: str) -> List[AttackRequest]:
        builders = {
            "sniper": self._sniper,
            "battering-ram": self._battering_ram,
            "pitchfork": self._pitchfork,
            "cluster-bomb": self._cluster_bomb,
        }
        if attack_type not in builders:
            raise ValueError(f"Unsupported attack type: {attack_type}")

        sets = self._items(payload_sets)
        if not sets:
            raise ValueError("Payload sets cannot be empty.")

        positions = extract(template, SELECTION_MARKER)
        if not positions:
            raise ValueError(
                f"No payload positions found. Use {SELECTION_MARKER} markers "
                f"(e.g. {SELECTION_MARKER}value{SELECTION_MARKER}).")

        if self.logger:
            self.logger.info(
                f"{attack_type}: {len(positions)} positions, {len(sets)} payload sets")

        total = self._count(attack_type, positions, sets)
        if total > self.max_requests:
            raise ValueError(
                f"Too many request combinations ({total}). "
                f"Maximum is {self.max_requests}, split into smaller batches.")

        requests = builders[attack_type](template, positions, sets)
        if self.logger and self.logger.verbose >= 2:
            for req in requests:
                self.logger.debug(
                    f"→ {req.id} {self.logger.PAY}{req.payload}{Style.RESET_ALL}")
        return requests


def generate_requests(template: str, payload_sets: Sequence[Any], attack_type: str) -> List[AttackRequest]:
    return Engine().generate(template, payload_sets, attack_type)
