"""Handlers for 'novaticket signup/login/logout/whoami'."""

from getpass import getpass

from novaticket.cli._common import error, field_errors, open_services, output_json, output_result


def _password(args, prompt: str = "Password: ") -> str:
    if args.password is not None:
        return args.password
    return getpass(prompt)


def signup(args) -> int:
    """Register an account."""
    services = open_services(args.data)
    password = _password(args)
    confirm = password if args.password is not None else getpass("Confirm password: ")

    result = services.users.signup(args.email, password, confirm, args.name)
    if result.errors:
        field_errors(result.errors, args.json)
    if result.error:
        error(result.error, args.json)

    user = result.user
    output_result(
        {"id": user.id, "email": user.email, "fullName": user.full_name},
        f"Account created for {user.email}. Please log in.",
        args.json,
    )
    return 0


def login(args) -> int:
    """Log in and store a session."""
    services = open_services(args.data)
    result = services.users.login(args.email, _password(args))
    if result.errors:
        field_errors(result.errors, args.json)
    if result.error:
        error(result.error, args.json)

    session = services.gate.current()
    output_result(session.to_dict(), f"Logged in as {session.full_name} <{session.email}>", args.json)
    return 0


def logout(args) -> int:
    """Clear the stored session."""
    services = open_services(args.data)
    failure = services.gate.clear()
    if failure:
        error(failure, args.json)
    output_result({"isAuthenticated": False}, "Logged out", args.json)
    return 0


def whoami(args) -> int:
    """Show the current session."""
    services = open_services(args.data)
    session = services.gate.current()
    if session is None or not session.is_authenticated:
        error("not logged in", args.json)

    if args.json:
        output_json(session.to_dict())
    else:
        print(f"{session.full_name} <{session.email}> since {session.login_time}")
    return 0
