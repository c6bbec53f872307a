#!/usr/bin/env python3
"""
Metaverse University command line.

``serve`` runs the chain fixture API.  The other commands act as the student
portal would: chain commands go through :class:`chain_client.ChainServiceClient`,
dashboard commands read and write the gamification database directly.
Failures are printed as a red message and the command exits with status 1;
nothing is retried.
"""

import argparse
import json
import sys
from typing import Any, Callable, List, Optional

from colorama import init, Fore, Style

import database
from campus.config import load_config
from campus.logs import setup_logging
from campus.services import GamificationService
from chain_client import ChainServiceClient, ClientRequestError

# Initialize colorama for cross-platform colored terminal output
init(autoreset=True)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


def _toast_error(message: str) -> int:
    print(f"{Fore.RED}Error: {message}")
    return 1


def _toast_ok(message: str) -> None:
    print(f"{Fore.GREEN}{message}")


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------

def cmd_serve(args, config) -> int:
    from chain_api import create_app

    host = args.host or config['host']
    port = args.port or config['port']
    app = create_app(config=config)

    print("\n" + "=" * 60)
    print(f"{Fore.CYAN}Metaverse University chain fixture service")
    print("=" * 60)
    print(f"  Health check: http://{host}:{port}/health")
    print(f"  API base URL: http://{host}:{port}/api")
    print(f"{Style.DIM}  Press Ctrl+C to stop the server")
    print("=" * 60 + "\n")
    try:
        app.run(host=host, port=port, debug=False, threaded=True)
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}Chain fixture service stopped")
    return 0


# ---------------------------------------------------------------------------
# Chain commands (through the HTTP client)
# ---------------------------------------------------------------------------

def _chain_call(config, call: Callable[[ChainServiceClient], Any],
                success: Optional[str] = None) -> int:
    client = ChainServiceClient.from_config(config)
    try:
        result = call(client)
    except ClientRequestError as exc:
        return _toast_error(exc.message)
    if success:
        _toast_ok(success)
    _print_json(result)
    return 0


def cmd_health(args, config) -> int:
    return _chain_call(config, lambda c: c.health_check())


def cmd_stats(args, config) -> int:
    return _chain_call(config, lambda c: c.get_stats())


def cmd_wallet(args, config) -> int:
    if args.connect:
        return _chain_call(config, lambda c: c.connect_wallet(args.address),
                           success='Wallet connected')
    if args.balance:
        return _chain_call(config, lambda c: c.get_wallet_balance(args.address))
    return _chain_call(config, lambda c: c.get_wallet(args.address))


def cmd_certificates(args, config) -> int:
    if args.id:
        return _chain_call(config, lambda c: c.get_certificate(args.id))
    return _chain_call(config, lambda c: c.get_certificates(args.student))


def cmd_mint(args, config) -> int:
    return _chain_call(
        config,
        lambda c: c.mint_certificate(args.student, args.course, args.grade, args.credits),
        success=f'NFT certificate created for {args.course}',
    )


def cmd_rewards(args, config) -> int:
    return _chain_call(config, lambda c: c.get_rewards(args.student))


def cmd_issue(args, config) -> int:
    return _chain_call(
        config,
        lambda c: c.issue_reward(args.student, args.amount, args.reason,
                                 course_name=args.course,
                                 achievement_name=args.achievement),
        success=f'{args.amount} EDU issued',
    )


def cmd_transactions(args, config) -> int:
    if args.hash:
        return _chain_call(config, lambda c: c.get_transaction(args.hash))
    return _chain_call(config, lambda c: c.get_transactions(args.address, args.type))


def cmd_verify(args, config) -> int:
    try:
        data = json.loads(args.data)
    except ValueError:
        data = args.data
    return _chain_call(config, lambda c: c.verify(args.type, data),
                       success='Verification completed')


# ---------------------------------------------------------------------------
# Gamification commands (direct database access)
# ---------------------------------------------------------------------------

def _open_db(config):
    database.configure(config['database_url'])
    if not database.init_db():
        return None
    return database.SessionLocal()


def _with_db(config, call) -> int:
    db = _open_db(config)
    if db is None:
        return _toast_error('Database not available')
    try:
        return call(GamificationService(database), db)
    finally:
        db.close()


def cmd_init_db(args, config) -> int:
    def run(service, db):
        _toast_ok(f"Database ready at {config['database_url']}")
        return 0
    return _with_db(config, run)


def cmd_dashboard(args, config) -> int:
    def run(service, db):
        _print_json(service.get_dashboard(db, args.user_id))
        return 0
    return _with_db(config, run)


def cmd_leaderboard(args, config) -> int:
    def run(service, db):
        board = service.get_leaderboard(db, limit=args.limit)
        for entry in board:
            name = entry.get('display_name') or entry.get('username') or entry['user_id']
            marker = f"{Fore.MAGENTA}*" if entry['user_id'] == args.user_id else ' '
            print(f"{marker}{entry['rank']:>3}. {name:<30} {entry['points']:>7} pts  L{entry['level']}")
        if not board:
            print(f"{Fore.YELLOW}No students yet")
        return 0
    return _with_db(config, run)


def cmd_join_challenge(args, config) -> int:
    def run(service, db):
        ok, message = service.join_challenge(db, args.user_id, args.challenge_id)
        if not ok:
            return _toast_error(message)
        _toast_ok('Challenge joined! Good luck completing this challenge!')
        return 0
    return _with_db(config, run)


def cmd_enroll(args, config) -> int:
    def run(service, db):
        ok, message = service.enroll(db, args.user_id, args.class_id)
        if not ok:
            return _toast_error(message)
        _toast_ok('Enrolled successfully! You have been enrolled in the class!')
        return 0
    return _with_db(config, run)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Metaverse University tools')
    parser.add_argument('--config', default=None, help='Path to a JSON config file')
    parser.add_argument('--log-level', default=None, help='DEBUG, INFO, WARNING, ...')
    parser.add_argument('--api-url', default=None, help='Chain API base URL (…/api)')
    parser.add_argument('--database-url', default=None, help='SQLAlchemy database URL')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('serve', help='Run the chain fixture API')
    p.add_argument('--host', default=None)
    p.add_argument('--port', type=int, default=None)
    p.set_defaults(func=cmd_serve)

    sub.add_parser('health', help='Check the chain service').set_defaults(func=cmd_health)
    sub.add_parser('stats', help='Show chain statistics').set_defaults(func=cmd_stats)

    p = sub.add_parser('wallet', help='Look up or connect a wallet')
    p.add_argument('address')
    group = p.add_mutually_exclusive_group()
    group.add_argument('--connect', action='store_true')
    group.add_argument('--balance', action='store_true')
    p.set_defaults(func=cmd_wallet)

    p = sub.add_parser('certificates', help='List certificates')
    p.add_argument('--student', default=None)
    p.add_argument('--id', default=None)
    p.set_defaults(func=cmd_certificates)

    p = sub.add_parser('mint', help='Mint a course certificate')
    p.add_argument('student')
    p.add_argument('course')
    p.add_argument('grade')
    p.add_argument('--credits', default=None)
    p.set_defaults(func=cmd_mint)

    p = sub.add_parser('rewards', help='List token rewards')
    p.add_argument('--student', default=None)
    p.set_defaults(func=cmd_rewards)

    p = sub.add_parser('issue', help='Issue an EDU token reward')
    p.add_argument('student')
    p.add_argument('amount')
    p.add_argument('reason')
    p.add_argument('--course', default=None)
    p.add_argument('--achievement', default=None)
    p.set_defaults(func=cmd_issue)

    p = sub.add_parser('transactions', help='List transactions')
    p.add_argument('--address', default=None)
    p.add_argument('--type', default=None)
    p.add_argument('--hash', default=None)
    p.set_defaults(func=cmd_transactions)

    p = sub.add_parser('verify', help='Request a (simulated) verification')
    p.add_argument('type')
    p.add_argument('data', help='JSON value or plain string')
    p.set_defaults(func=cmd_verify)

    sub.add_parser('init-db', help='Create gamification tables').set_defaults(func=cmd_init_db)

    p = sub.add_parser('dashboard', help='Show a student dashboard')
    p.add_argument('user_id')
    p.set_defaults(func=cmd_dashboard)

    p = sub.add_parser('leaderboard', help='Show the points leaderboard')
    p.add_argument('--limit', type=int, default=10)
    p.add_argument('--user-id', default=None, help='Highlight this student')
    p.set_defaults(func=cmd_leaderboard)

    p = sub.add_parser('join-challenge', help='Join a challenge')
    p.add_argument('user_id')
    p.add_argument('challenge_id')
    p.set_defaults(func=cmd_join_challenge)

    p = sub.add_parser('enroll', help='Enroll in a class')
    p.add_argument('user_id')
    p.add_argument('class_id')
    p.set_defaults(func=cmd_enroll)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    if args.log_level:
        config['log_level'] = args.log_level
    if args.api_url:
        config['chain_service_url'] = args.api_url
    if args.database_url:
        config['database_url'] = args.database_url
    setup_logging(config['log_level'])
    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
