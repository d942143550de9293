import argparse
import asyncio
import sys
from pathlib import Path

from examgate.client import ExamClient, HttpGateway
from examgate.errors import ExamGateError
from examgate.logging_setup import setup_console_logging
from examgate.models.questions import TestDefinition
from examgate.utils import json_load, json_pretty

setup_console_logging()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the current test over the API")
    parser.add_argument(
        "--server",
        default="http://127.0.0.1:8000",
        help="Base URL of the running server",
    )
    parser.add_argument("--code", required=True, help="Access code")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("verify", help="Check the code and print the resolved role")

    export_parser = subparsers.add_parser("export", help="Write the current test to JSON")
    export_parser.add_argument("output", type=Path, help="Output JSON file")

    import_parser = subparsers.add_parser("import", help="Save a test from JSON (editor code)")
    import_parser.add_argument("file", type=Path, help="Input JSON file")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    async with HttpGateway(args.server) as gateway:
        client = ExamClient(gateway)
        result = await client.verify(args.code)
        if not result.valid:
            print("Invalid access code")
            return 1

        if args.command == "verify":
            print(f"Valid code, role: {result.role.value}")
            return 0

        if args.command == "export":
            definition = await client.load_questions()
            args.output.write_text(json_pretty(definition.to_payload()), encoding="utf-8")
            print(f"Saved {len(definition.questions)} questions to {args.output}")
            return 0

        definition = TestDefinition.model_validate(
            json_load(args.file.read_text(encoding="utf-8"))
        )
        await client.save_questions(definition)
        print(f"Saved {len(definition.questions)} questions")
        return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        return asyncio.run(run(args))
    except ExamGateError as exc:
        print(f"Error: {exc.public_message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
