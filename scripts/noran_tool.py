#!/usr/bin/env python3
"""Decode captured Noran frames or listen for live ones.

Usage::

    python scripts/noran_tool.py decode 1e000800...
    python scripts/noran_tool.py listen --port 5061

`decode` registers every device it sees, so no device list has to be
prepared. `listen` does so only with `--register-unknown` or
`NORAN_REGISTER_UNKNOWN`; otherwise frames from unknown devices are
dropped.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pynoran import (  # noqa: E402
    DecodeOutcome,
    DeviceDirectory,
    NoranConfig,
    NoranDecoder,
    PositionRecord,
)
from pynoran._transport import start_listener  # noqa: E402


def _print_position(position: PositionRecord) -> None:
    print(position.model_dump_json(), flush=True)


def _cmd_decode(args: argparse.Namespace, config: NoranConfig) -> int:
    try:
        frame = bytes.fromhex("".join(args.frame.split()))
    except ValueError as exc:
        print(f"Invalid hex: {exc}", file=sys.stderr)
        return 2

    decoder = NoranDecoder(DeviceDirectory(register_unknown=True), log_max_bytes=config.log_max_bytes)
    result = decoder.process(frame)
    if result.outcome is DecodeOutcome.FAULT:
        print(f"Decode fault: {result.error}", file=sys.stderr)
        return 1
    if result.position is not None:
        _print_position(result.position)
    else:
        header = result.header
        type_name = header.message_type.name if header is not None else "?"
        print(f"{result.outcome} ({type_name})")
    return 0


async def _listen(config: NoranConfig) -> None:
    directory = DeviceDirectory(register_unknown=config.register_unknown)
    decoder = NoranDecoder(directory, log_max_bytes=config.log_max_bytes)
    transport, _protocol = await start_listener(config, decoder, _print_position)
    try:
        await asyncio.Event().wait()
    finally:
        transport.close()


def _cmd_listen(args: argparse.Namespace, config: NoranConfig) -> int:
    try:
        asyncio.run(_listen(config))
    except KeyboardInterrupt:
        pass
    return 0


def build_config(args: argparse.Namespace) -> NoranConfig:
    """Combine command-line options with ``NORAN_*`` environment variables."""
    overrides: dict[str, object] = {}
    if args.command == "listen":
        if args.register_unknown:
            overrides["register_unknown"] = True
        if args.host is not None:
            overrides["host"] = args.host
        if args.port is not None:
            overrides["port"] = args.port
    return NoranConfig.from_env(**overrides)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser("decode", help="Decode one hex-encoded frame")
    decode.add_argument("frame", help="Frame bytes as hex (whitespace allowed)")

    listen = sub.add_parser("listen", help="Run the UDP listener")
    listen.add_argument("--host", default=None)
    listen.add_argument("--port", type=int, default=None)
    listen.add_argument(
        "--register-unknown",
        action="store_true",
        default=None,
        help="Register devices seen for the first time (default: NORAN_REGISTER_UNKNOWN)",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = build_config(args)

    if args.command == "decode":
        return _cmd_decode(args, config)
    return _cmd_listen(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
