"""
Main entry point for the ssrs-admin command line.

This module is responsible for:
- Parsing command-line arguments.
- Setting up logging (verbose mode).
- Loading configuration from a YAML file.
- Dispatching to the command with a proxy that connects on its first remote call.
- Mapping errors to a non-zero exit status.
"""
import argparse
import getpass
import logging
import sys
from typing import Any, Dict, List, Optional

import requests
from zeep.exceptions import Error as ZeepError

from ssrs_admin.client.connection import LazyReportingService, connect
from ssrs_admin.cmdlets import (ConfirmationGate, get_catalog_item_access, remove_catalog_item,
                                revoke_catalog_item_access, set_data_source_password)
from ssrs_admin.cmdlets.data_source import SET_PASSWORD_ACTION
from ssrs_admin.config_loader import AUTH_METHODS, load_config
from ssrs_admin.errors import SsrsAdminError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """
    Configures the global logging settings for the entire application.
    This should be called as early as possible during startup.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s [%(levelname)-8s] %(name)s.%(funcName)s: %(message)s'
    )
    # zeep logs raw XML at DEBUG, too noisy even for --verbose
    logging.getLogger("zeep").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ssrs-admin", description="Administer a SQL Server Reporting Services catalog.")
    parser.add_argument("--config", default="config.yaml", help="Path to the YAML configuration file.")
    parser.add_argument("--uri", help="Report server URI, e.g. http://server/ReportServer.")
    parser.add_argument("--auth", choices=AUTH_METHODS, help="Authentication method.")
    parser.add_argument("--username", help="Account used to connect (DOMAIN\\user for NTLM).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every remote call.")
    parser.add_argument("--what-if", action="store_true", help="Show what would change without changing anything.")
    parser.add_argument("--confirm", action="store_true", help="Ask before each change.")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("set-datasource-password", help="Set the stored password of a data source.")
    p.add_argument("path")
    p.add_argument("--password", help="New password; prompted for when omitted.")

    p = sub.add_parser("remove-item", help="Delete one or more catalog items.")
    p.add_argument("paths", nargs="+")

    p = sub.add_parser("revoke-access", help="Revoke all roles an identity holds on a catalog item.")
    p.add_argument("path")
    p.add_argument("identity")
    p.add_argument("--strict", action="store_true", help="Fail if the identity holds no policy on the item.")

    p = sub.add_parser("get-access", help="List the policies on a catalog item.")
    p.add_argument("path")
    p.add_argument("--identity", help="Only show policies held by this identity.")

    return parser


def dispatch(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    gate = ConfirmationGate(what_if=args.what_if, confirm=args.confirm)

    # The WSDL is only downloaded once a command makes its first remote call
    proxy = LazyReportingService(
        lambda: connect(config, uri=args.uri, auth=args.auth, username=args.username))

    if args.command == "set-datasource-password":
        # Ask before prompting for the secret; the command itself then runs ungated
        if not gate.should_process(args.path, SET_PASSWORD_ACTION):
            return 0
        password = args.password if args.password is not None else getpass.getpass("New data source password: ")
        set_data_source_password(args.path, password, proxy=proxy)
    elif args.command == "remove-item":
        remove_catalog_item(args.paths, proxy=proxy, gate=gate)
    elif args.command == "revoke-access":
        revoke_catalog_item_access(args.path, args.identity, strict=args.strict, proxy=proxy, gate=gate)
    elif args.command == "get-access":
        for policy in get_catalog_item_access(args.path, identity=args.identity, proxy=proxy):
            print(f"{policy.group_user_name}\t{', '.join(policy.role_names)}")
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    config = load_config(args.config)
    try:
        return dispatch(args, config)
    except SsrsAdminError as e:
        logger.error(str(e))
        return 1
    except (requests.RequestException, ZeepError) as e:
        logger.error(f"Could not connect to the report server: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 130


if __name__ == "__main__":
    sys.exit(run())
