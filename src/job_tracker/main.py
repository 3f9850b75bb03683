import argparse
import json
import logging
import sys

from .agent import run_command
from .board import BoardStore
from .client import AgentError, get_intent
from .nlp_rules import classify_intent
from .server import run_server
from .settings import load_settings


def _print_reply(reply, dry_run: bool) -> None:
    tag = "DRY-RUN" if dry_run else "AGENT"
    print(f"[{tag}] {reply.intent.value} | {reply.title}")
    for line in reply.lines:
        print(f"  {line}")
    for tip in reply.tips:
        print(f"  {tip}")


def process_command(cfg, command: str, remote: bool = False, dry_run: bool = False) -> int:
    store = BoardStore(cfg.board_path)

    parsed = None
    if remote:
        try:
            parsed = get_intent(command, cfg.agent_url)
        except AgentError as e:
            print(f"[ERROR] {e}", file=sys.stderr)
            return 1

    reply = run_command(
        command,
        store,
        tz_name=cfg.timezone,
        read_only=dry_run or bool(cfg.app.get("dry_run", False)),
        parsed=parsed,
    )
    _print_reply(reply, dry_run)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Job Tracker board agent")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("serve", help="Run the agent HTTP server")

    p_parse = sub.add_parser("parse", help="Classify a command and print the JSON result")
    p_parse.add_argument("text", nargs=argparse.REMAINDER)

    p_run = sub.add_parser("run", help="Classify a command and apply it to the board")
    p_run.add_argument("--remote", action="store_true", help="Classify through the agent server")
    p_run.add_argument("--dry-run", action="store_true", help="Do not write to the board; print instead")
    # options go before the command; the rest is taken verbatim ("Acme -> Offer")
    p_run.add_argument("text", nargs=argparse.REMAINDER)

    args = parser.parse_args(argv)
    if args.cmd != "serve" and not " ".join(getattr(args, "text", [])).strip():
        parser.error("a command is required")
    cfg = load_settings()
    logging.basicConfig(
        level=str(cfg.app.get("log_level", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "serve":
        run_server(cfg)
        return 0
    command = " ".join(args.text)
    if args.cmd == "parse":
        print(json.dumps(classify_intent(command).to_dict(), ensure_ascii=False, indent=2))
        return 0
    return process_command(cfg, command, remote=args.remote, dry_run=args.dry_run)


if __name__ == "__main__":
    sys.exit(main())
