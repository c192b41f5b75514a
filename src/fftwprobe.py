"""fftwprobe - locate FFTW3 precision variants through pkg-config

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

import fftw3
from args import parse_args
from cli_config import ConfigError, build_config, run_build_command
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from common.pkg_config import PkgConfig
from constants import Constants, ExitCodes
from errors import (
    FftwProbeError,
    InvalidPrecisionTag,
    LibraryAbsent,
    ToolMissing,
    VersionParseError,
    VersionTooLow,
)
from resolver import PrecisionResolver
from versioning.parser import parse_precision_tags

logger = logging.getLogger(__name__)

_EXIT_FOR_ERROR = (
    (ToolMissing, ExitCodes.TOOL_MISSING),
    (InvalidPrecisionTag, ExitCodes.INVALID_PRECISION),
    (LibraryAbsent, ExitCodes.LIBRARY_ABSENT),
    (VersionParseError, ExitCodes.VERSION_ERROR),
    (VersionTooLow, ExitCodes.VERSION_ERROR),
)


def exit_code_for(exc: FftwProbeError) -> ExitCodes:
    """Map a discovery error to the process exit code."""
    for cls, code in _EXIT_FOR_ERROR:
        if isinstance(exc, cls):
            return code
    return ExitCodes.FILE_ERROR


def _setup_logging(args):
    # Honor CLI --loglevel by passing it to centralized logger via env
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(getattr(args, "LOG_FILE", None))


def cmd_precisions(resolver, cfg, args):
    """Print the installed precisions."""
    found = resolver.resolve(parse_precision_tags(cfg.precision))
    if not found:
        raise LibraryAbsent("No fftw package found!")
    if args.OUTPUT_FORMAT == "json":
        print(json.dumps(found.as_dict(), indent=2, sort_keys=True))
    else:
        for tag, pkg in found.packages.items():
            print(f"{tag.value}\t{pkg}")


def cmd_cflags(resolver, cfg, _args):
    print(resolver.cflags(parse_precision_tags(cfg.precision)))


def cmd_libs(resolver, cfg, _args):
    print(resolver.libs(parse_precision_tags(cfg.precision)))


def cmd_check_version(resolver, cfg, args):
    """Check the installed version against the requested minimum."""
    requested = args.VERSION or cfg.min_version
    if not requested:
        raise VersionParseError("", "requested version (none given)")
    resolver.require_version(requested)
    logger.info("FFTW3 version requirement %s satisfied", requested)


def cmd_ensure(resolver, cfg, _args):
    """Resolve precisions, running the configured build command if none is found."""
    def build():
        if not cfg.build_command:
            raise LibraryAbsent("FFTW3 not found and no build command configured")
        run_build_command(cfg.build_command)

    found = fftw3.ensure_installed(build, parse_precision_tags(cfg.precision), tool=resolver.tool)
    for tag, pkg in found.packages.items():
        print(f"{tag.value}\t{pkg}")


COMMANDS = {
    "precisions": cmd_precisions,
    "cflags": cmd_cflags,
    "libs": cmd_libs,
    "check-version": cmd_check_version,
    "ensure": cmd_ensure,
}


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        cfg = build_config(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value

    try:
        resolver = PrecisionResolver(PkgConfig.locate(cfg.pkg_config))
        COMMANDS[args.action](resolver, cfg, args)
    except FftwProbeError as exc:
        logger.error("%s", exc)
        return exit_code_for(exc).value

    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
