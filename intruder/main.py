import argparse
import sys

from intruder.parsers.request import RequestTemplate
from intruder.parsers.markers import PAYLOAD_MARKER
from intruder.core.engine import Engine, ATTACK_TYPES
from intruder.core.errors import with_error_handling
from intruder.reporters.console import Log


def _read_payloads(filename: str):
    with open(filename, 'r', encoding='utf-8', errors='ignore') as f:
        return [l.rstrip("\r\n") for l in f if l.strip()]


def main(argv=None):
    p = argparse.ArgumentParser(description="Intruder payload marker toolkit")
    p.add_argument("--request", required=True, help="Archivo de request raw")
    p.add_argument("--marker", default=PAYLOAD_MARKER,
                   help="Marcador de payload para extraer posiciones (default: $)")
    p.add_argument("--wrap", metavar="TEXT",
                   help="Marca la primera aparición de TEXT con §")
    p.add_argument("--clear", action="store_true",
                   help="Elimina todas las marcas §")
    p.add_argument("--payloads", action="append", default=[], metavar="FILE",
                   help="Wordlist (una por posición, repetible)")
    p.add_argument("--attack-type", default="sniper", choices=ATTACK_TYPES)
    p.add_argument("-v", "--verbose", action="count", default=1,
                   help="-v, -vv")
    args = p.parse_args(argv)

    log = Log(verbose=args.verbose)
    req = RequestTemplate(args.request)
    try:
        req.load()
    except (OSError, ValueError) as e:
        log.fail(str(e))
        return 1
    log.info(f"{req.method} {req.path} @ {req.host or '?'}")

    if args.clear:
        req.clear()
    if args.wrap:
        req.wrap(args.wrap)
    if args.clear or args.wrap:
        print(req.raw)

    positions = with_error_handling(req.positions, "extract positions", log)(args.marker)
    for pos in positions or []:
        log.position(pos)
    if positions == []:
        log.warn(f"Sin posiciones marcadas con {args.marker!r}")

    if not args.payloads:
        return 0

    engine = Engine(logger=log)
    try:
        sets = [_read_payloads(f) for f in args.payloads]
        requests = engine.generate(req.raw, sets, args.attack_type)
    except (OSError, ValueError) as e:
        log.fail(str(e))
        return 1

    for r in requests:
        log.info(str(r))
        if log.verbose >= 2:
            print(r.request)
    log.ok(f"{len(requests)} requests generadas ({args.attack_type})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
