"""sequencer-types CLI entry point."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from sequencer_types.schemas.records_v1 import RECORD_TYPES


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="sequencer-types",
        description="Canonical sequencer records: encoding, commitments and golden vectors",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.add_parser("verify", help="Run golden vector verification for every record type")
    show_parser = sub.add_parser(
        "show",
        help="Print a reference instance's canonical JSON and commitment",
    )
    show_parser.add_argument("kind", choices=sorted(RECORD_TYPES))
    commit_parser = sub.add_parser("commit", help="Print the commitment of a record JSON file")
    commit_parser.add_argument("kind", choices=sorted(RECORD_TYPES))
    commit_parser.add_argument(
        "--file", required=True, metavar="record.json",
        help="Path to a record JSON file",
    )
    validate_parser = sub.add_parser(
        "validate",
        help="Validate a record JSON file against the canonical contract",
    )
    validate_parser.add_argument("kind", choices=sorted(RECORD_TYPES))
    validate_parser.add_argument(
        "--file", required=True, metavar="record.json",
        help="Path to a record JSON file",
    )
    args = parser.parse_args()

    from sequencer_types.logs import setup_logging
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "verify":
        from reference_vectors.verify import run_verify
        report = run_verify()
        for name, passed in report.items():
            print(f"{'OK' if passed else 'ERROR'}: {name}")
        if all(report.values()):
            print("OK: all reference vectors verified")
            sys.exit(0)
        print("ERROR: reference vector verification failed")
        sys.exit(1)
    elif args.command == "show":
        show_reference(args.kind)
        sys.exit(0)
    elif args.command == "commit":
        try:
            commitment = commit_record_file(args.kind, Path(args.file))
        except (ValueError, OSError) as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        for line in describe_commitment(commitment):
            print(line)
        sys.exit(0)
    elif args.command == "validate":
        import jsonschema
        from sequencer_types.errors import MalformedRecord
        try:
            validate_record_file(args.kind, Path(args.file))
        except jsonschema.ValidationError as exc:
            print(f"ERROR: invalid {args.kind}: {exc.message}")
            sys.exit(1)
        except MalformedRecord as exc:
            print(str(exc))
            sys.exit(1)
        except (ValueError, OSError) as exc:
            print(f"ERROR: {exc}")
            sys.exit(1)
        print(f"OK: {args.kind} is valid")
        sys.exit(0)
    else:
        parser.print_help()
        sys.exit(1)


def describe_commitment(commitment) -> list:
    """The three harvestable forms of a commitment, one per line."""
    return [
        f"commitment: {commitment}",
        f"commitment bytes: {list(commitment.digest)}",
        f"commitment U256: {commitment.to_u256()}",
    ]


def show_reference(kind: str) -> None:
    """Print the live reference instance for ``kind``.

    This is the manual update path for a deliberate breaking change: the
    output is reviewed and copied into the fixture / pinned constant by hand.
    """
    from reference_vectors.vectors import get_vector
    from sequencer_types.schemas.records_v1 import dump_record

    record = get_vector(kind).build()
    print(dump_record(record))
    for line in describe_commitment(record.commit()):
        print(line)


def commit_record_file(kind: str, path: Path):
    """Decode a record JSON file of the given kind and return its commitment.

    Raises ``MalformedRecord`` if the file does not decode.
    """
    from sequencer_types.schemas.records_v1 import load_record, record_type

    return load_record(record_type(kind), path).commit()


def validate_record_file(kind: str, path: Path) -> None:
    """Validate a record JSON file: structural contract first, then decode.

    Raises ``jsonschema.ValidationError`` if the file does not conform to
    ``records.v1.json``, ``MalformedRecord`` if it does not decode.
    """
    from sequencer_types.contract_validate import validate_record_data
    from sequencer_types.schemas.records_v1 import decode, record_type

    data = json.loads(path.read_text(encoding="utf-8"))
    validate_record_data(kind, data)
    decode(record_type(kind), data)


if __name__ == "__main__":
    main()
