"""plugvend - vendor binary wheels into per-plugin directories.

    plugvend <plugin> install <package>[==version] ... [-r requirements.txt]
    plugvend <plugin> uninstall <package> ...
    plugvend <plugin> list

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import build_parser, parse_args
from cli_config import ConfigError, load_settings
from common.http_client import DownloadError
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import Commands, Constants, ExitCodes
from registry.pypi.client import PackageNotFoundError, RegistryError
from resolution.errors import ResolutionError
from resolution.request import load_requirements_file, parse_install_token
from vendor.installer import Installer, NotInstalledError
from vendor.layout import LayoutError

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.LOG_LEVEL_ENV] = str(args.LOG_LEVEL).upper()
    configure_logging()
    if getattr(args, "QUIET", False):
        logging.getLogger().setLevel(logging.ERROR)

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def _emit(args, message):
    if not getattr(args, "QUIET", False):
        print(message)


def _exit_code_for(exc):
    """Map a failure to the exit code reported to the shell."""
    if isinstance(exc, (ResolutionError, PackageNotFoundError)):
        return ExitCodes.RESOLUTION_ERROR
    if isinstance(exc, (RegistryError, DownloadError)):
        return ExitCodes.CONNECTION_ERROR
    return ExitCodes.FILE_ERROR


def collect_requests(args):
    """Gather install requests from positional tokens and -r files."""
    found = [parse_install_token(token) for token in args.packages]
    for path in args.REQUIREMENT_FILES:
        found.extend(load_requirements_file(path))
    return found


def cmd_install(args, installer):
    """Install every requested package; stop at the first failure."""
    pkg_requests = collect_requests(args)
    if not pkg_requests:
        logging.error("Nothing to install: name at least one package or -r file.")
        return ExitCodes.FILE_ERROR
    for request in pkg_requests:
        result = installer.install(args.plugin, request)
        if result.action == "unchanged":
            _emit(args, f"{result.name} {result.version} already installed")
        elif result.action == "upgraded":
            _emit(args, f"Upgraded {result.name} {result.replaced} -> {result.version} ({result.artifact.filename})")
        else:
            _emit(args, f"Installed {result.name} {result.version} ({result.artifact.filename})")
    return ExitCodes.SUCCESS


def cmd_uninstall(args, installer):
    """Remove each named package from the plugin's vendor directory."""
    if not args.packages:
        logging.error("Nothing to uninstall: name at least one package.")
        return ExitCodes.FILE_ERROR
    for name in args.packages:
        dist = installer.uninstall(args.plugin, name)
        _emit(args, f"Uninstalled {dist.name} {dist.version}")
    return ExitCodes.SUCCESS


def cmd_list(args, installer):
    """Print installed distributions, one per line."""
    installed = installer.list_installed(args.plugin)
    if not installed:
        _emit(args, f"No packages installed for {args.plugin}")
    for dist in installed:
        _emit(args, f"{dist.name} {dist.version}")
    return ExitCodes.SUCCESS


COMMANDS = {
    Commands.INSTALL.value: cmd_install,
    Commands.UNINSTALL.value: cmd_uninstall,
    Commands.LIST.value: cmd_list,
}


def run(args):
    """Dispatch parsed arguments; returns an ExitCodes member."""
    handler = COMMANDS.get(args.command)
    if handler is None:
        # Unknown commands are not an error, only a usage reminder
        build_parser().print_usage()
        print(f"Unknown command '{args.command}'. Expected one of: {', '.join(Constants.SUPPORTED_COMMANDS)}")
        return ExitCodes.SUCCESS

    try:
        settings = load_settings(args)
    except ConfigError as e:
        logging.error("%s", e)
        return ExitCodes.FILE_ERROR

    installer = Installer(settings)
    try:
        return handler(args, installer)
    except (ResolutionError, RegistryError, DownloadError, LayoutError, NotInstalledError, OSError) as e:
        logging.error("%s", e)
        if is_debug_enabled(logger):
            logger.debug(
                "Command failed",
                exc_info=True,
                extra=extra_context(event="function_exit", component="cli", action=args.command, outcome="error"),
            )
        return _exit_code_for(e)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    logger.debug(
        "CLI start",
        extra=extra_context(event="function_entry", component="cli", action="main")
    )
    sys.exit(run(args).value)


if __name__ == "__main__":
    main()
