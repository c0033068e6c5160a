"""Entry point for novaticket CLI."""

import logging
import sys
from pathlib import Path

NOUNS = {"signup", "login", "logout", "whoami", "dashboard", "ticket", "config", "web"}


def main():
    # No subcommand or non-noun argument = TUI mode
    if len(sys.argv) < 2 or (sys.argv[1] not in NOUNS and not sys.argv[1].startswith("-")):
        from novaticket.cli import DEFAULT_DATA
        from novaticket.ui import NovaTicketApp

        path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_DATA
        app = NovaTicketApp(Path(path).expanduser().resolve())
        app.run()
        return

    from novaticket.cli import build_parser

    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.INFO if args.verbose else logging.WARNING,
    )

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
