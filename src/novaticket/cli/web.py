"""Handler for 'novaticket web' command."""

import shutil
import sys
from pathlib import Path

from textual_serve.server import Server


def web(args) -> int:
    data_dir = str(Path(args.data).expanduser().resolve())

    novaticket = shutil.which("novaticket")
    if novaticket is None:
        print("error: novaticket not found on PATH", file=sys.stderr)
        return 1

    command = f"{novaticket} {data_dir}"
    server = Server(command, host=args.host, port=args.port, title="NovaTicket")

    print(f"serving {data_dir} at http://{args.host}:{args.port}")
    server.serve()
    return 0
