from __future__ import annotations

from config.signin_config import SignInConfig
from tools.google_signin import authenticate, clear_stored_credentials
from utils.logger import Logger, log_event


def _print_help() -> None:
    print(
        "\nCommands:\n"
        "- 'sign in'\n"
        "- 'sign out'\n"
        "- 'help'\n"
        "- 'quit'\n"
    )


def detect_command(text: str) -> str:
    """sign_in | sign_out | help | quit | unknown"""
    low = " ".join((text or "").lower().split())
    if not low:
        return "unknown"
    if low in {"q", "quit", "exit"}:
        return "quit"
    if "sign out" in low or "signout" in low or "logout" in low or "log out" in low:
        return "sign_out"
    if "sign in" in low or "signin" in low or "login" in low or "log in" in low:
        return "sign_in"
    if "help" in low or low == "?":
        return "help"
    return "unknown"


def main() -> None:
    logger = Logger().build()
    cfg = SignInConfig()

    print("GPA Tracker - Google sign-in")
    _print_help()

    while True:
        try:
            text = input("You> ").strip()
        except EOFError:
            break
        if not text:
            continue

        command = detect_command(text)
        log_event(logger, "command", text=text, command=command)

        if command == "quit":
            break

        if command == "help":
            _print_help()
            continue

        if command == "sign_out":
            ok = clear_stored_credentials(cfg)
            print("Signed out (tokens deleted)." if ok else "No stored tokens to delete.")
            continue

        if command == "sign_in":
            try:
                result = authenticate(cfg)
            except FileNotFoundError as e:
                print(str(e))
                print("Fix: download a Desktop OAuth client JSON and save it as 'client_secret.json'.")
                continue
            except Exception as e:
                print(f"Google sign-in failed: {e}")
                continue
            print(f"Signed in as {result.email} (suggested username: {result.username})")
            continue

        print("Sorry, I didn't understand. Say 'help' for commands.")


if __name__ == "__main__":
    main()
