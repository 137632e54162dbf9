import argparse
import asyncio
import json
import logging
from dataclasses import replace

from .config import DEFAULT_SETTINGS
from .host import ConnectionState, local_host
from .resolver import resolve_location
from .services import select_services


def build_host(args):
    conn = None
    if args.link_type is not None or args.effective_type is not None:
        conn = ConnectionState(type=args.link_type, effective_type=args.effective_type)
    return local_host(user_agent=args.user_agent, connection=conn)


def main(argv=None):
    ap = argparse.ArgumentParser(
        description="Locate this machine: GPS if a real sensor is present, else IP lookup, else a coarse sensor fix."
    )
    ap.add_argument("--ip", type=str, help="Look up this IP address instead of the caller's own")
    ap.add_argument("--user-agent", type=str, help="Device identifier string used for classification")
    ap.add_argument("--link-type", type=str, help="Connection link type, e.g. wifi, ethernet, cellular")
    ap.add_argument("--effective-type", type=str, help="Effective connection type, e.g. 4g, 3g, slow-2g")
    ap.add_argument("--services", type=str, default=None,
                    help="Comma list of IP services to try, in table order (default: all)")
    ap.add_argument("--http-timeout", type=float, default=DEFAULT_SETTINGS.http_timeout,
                    help="Per-service HTTP timeout in seconds")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        services = select_services(args.services.split(",") if args.services else None)
    except KeyError as e:
        raise SystemExit(e.args[0])

    settings = replace(DEFAULT_SETTINGS, http_timeout=args.http_timeout)
    result = asyncio.run(resolve_location(build_host(args), services=services, ip=args.ip, settings=settings))
    print(json.dumps(result.as_dict(json_safe=True), ensure_ascii=False, indent=2))
    if result.error:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
