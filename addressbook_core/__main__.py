#!/usr/bin/env python3

import os
import sys
import getpass
import argparse
import logging.config

import uvicorn

from addressbook_core import settings as _settings
from addressbook_core.api.api import create_app
from addressbook_core.schemas import config


SYSTEMD_UNIT_TEMPLATE = """[Unit]
Description=Address book core REST API server
After=network-online.target
Wants=network-online.target

[Service]
Type=simple
ExecStart={executable} -m addressbook_core run
User={user}
WorkingDirectory={directory}
Restart=always
SyslogIdentifier=addressbook_core

[Install]
WantedBy=multi-user.target
"""


def _add_init_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--config",
        metavar="path",
        default=_settings.CONFIG_PATHS[0],
        help=f"Path of the new config file (defaults to '{_settings.CONFIG_PATHS[0]}')"
    )
    parser.add_argument("--force", action="store_true", help="Allow overwriting an existing config file")
    parser.add_argument(
        "--public-base-url",
        metavar="url",
        help="Public base URL used to build the links of persons (e.g. behind a reverse proxy)"
    )


def _add_run_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--host", metavar="host", help="Listen on this address instead of the configured one")
    parser.add_argument("--port", type=int, metavar="port", help="Listen on this port instead of the configured one")
    parser.add_argument(
        "--config",
        metavar="path",
        default="config.json",
        help="Config file which takes precedence over the search paths (defaults to 'config.json')"
    )
    parser.add_argument("--debug", action="store_true", help="Log everything down to DEBUG level")
    parser.add_argument("--reload", action="store_true", help="Restart the server when the source changes")
    parser.add_argument("--no-access-log", action="store_true", help="Don't write the access log")
    parser.add_argument("--use-colors", action="store_true", help="Colorize the log output (may break file logs!)")
    parser.add_argument("--root-path", default="", metavar="path", help="Serve the API below this path prefix")


def _add_systemd_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--force", action="store_true", help="Allow overwriting an existing unit file")
    parser.add_argument(
        "--path",
        default=os.path.join(os.path.abspath("."), "addressbook_core.service"),
        metavar="path",
        help="Destination of the new systemd unit file"
    )


def get_parser(program: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=program)
    commands = parser.add_subparsers(
        description="Available sub-commands: init, run, systemd",
        dest="command",
        required=True,
        metavar="<command>",
        help="the sub-command to be executed"
    )

    for name, description, add_arguments in [
        ("init", "Create a config file with the default settings", _add_init_arguments),
        ("run", "Serve the address book REST API using the 'uvicorn' ASGI server", _add_run_arguments),
        ("systemd", "Create a systemd unit file to run the REST API as system service", _add_systemd_arguments)
    ]:
        add_arguments(commands.add_parser(name, description=description))
    return parser


def init_project(args: argparse.Namespace) -> int:
    if os.path.exists(args.config) and not args.force:
        print(f"The config file {args.config!r} already exists. Use '--force' to overwrite it.", file=sys.stderr)
        return 1

    try:
        conf = config.CoreConfig(server=config.ServerConfig(public_base_url=args.public_base_url))
    except ValueError as exc:
        print(f"Invalid public base URL {args.public_base_url!r}: {exc}", file=sys.stderr)
        return 1

    _settings.store_configuration(conf, args.config)
    print(f"Created the config file {args.config!r}.")
    return 0


def handle_systemd(args: argparse.Namespace) -> int:
    if os.path.exists(args.path) and not args.force:
        print(f"The file {args.path!r} already exists. Use '--force' to overwrite it.", file=sys.stderr)
        return 1

    executable = sys.executable
    if not executable:
        executable = "python3"
        print("Python interpreter path unknown, check the 'ExecStart' line of the unit file.", file=sys.stderr)

    with open(args.path, "w") as f:
        f.write(SYSTEMD_UNIT_TEMPLATE.format(
            executable=executable,
            user=getpass.getuser(),
            directory=os.path.abspath(".")
        ))

    print(
        f"Created the unit file {args.path!r}. Link it into /lib/systemd/system/, "
        f"run 'systemctl daemon-reload' and enable the new service afterwards."
    )
    return 0


def _enable_debug_logging(logging_config: config.LoggingConfig):
    logging_config.root["level"] = "DEBUG"
    for handler in logging_config.handlers.values():
        handler["level"] = "DEBUG"


def run_server(args: argparse.Namespace) -> int:
    _settings.CONFIG_PATHS.insert(0, args.config)
    try:
        settings = _settings.Settings()
    except ValueError:
        print(f"Invalid configuration, check the config file {_settings.find_config_file()!r}.", file=sys.stderr)
        raise

    if args.debug:
        print("Debug mode enabled, don't use it in production!", file=sys.stderr)
        _enable_debug_logging(settings.logging)

    host = settings.server.host if args.host is None else args.host
    port = settings.server.port if args.port is None else args.port
    app = create_app(settings=settings)
    logging.getLogger("addressbook_core").info(f"Serving the address book at {host}:{port}")

    uvicorn.run(
        "addressbook_core.api:api.app" if args.reload else app,
        host=host,
        port=port,
        reload=args.reload,
        log_level="debug" if args.debug else "info",
        log_config=settings.logging.model_dump(),
        access_log=not args.no_access_log,
        use_colors=args.use_colors,
        proxy_headers=True,
        root_path=args.root_path
    )
    return 0


if __name__ == '__main__':
    program_name = sys.argv[0] if not sys.argv[0].endswith("__main__.py") else "addressbook_core"
    namespace = get_parser(program_name).parse_args(sys.argv[1:])

    command_functions = {
        "init": init_project,
        "run": run_server,
        "systemd": handle_systemd
    }
    sys.exit(command_functions[namespace.command](namespace))
