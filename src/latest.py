"""latest - find the latest version of any command, package, or library.

    Returns:
        int: Exit code (0 up to date, 1 not found or not installed, 2 outdated)
"""
import json
import logging
import sys

from constants import Constants, ExitCodes
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import load_config
from install_hints import install_commands
from project import scan_project
from sources import source_by_name, sources_from_names
from versioning.cache import VersionCache
from versioning.models import LookupMode, LookupRequest, Status
from versioning.parser import parse_package_arg
from versioning.service import LookupService

logger = logging.getLogger(__name__)


class UsageError(Exception):
    """Invalid invocation; reported on stderr with exit code 1."""


def build_requests(args, packages, default_source=None):
    """Turn package arguments into lookup requests.

    The source for each package is ``--source``, else its ``source:`` prefix,
    else the project file's source. A pinned source means an explicit lookup
    against that source alone; otherwise the configured precedence is used.

    Args:
        args (argparse.Namespace): Parsed arguments.
        packages (list): Package arguments.
        default_source (str, optional): Source implied by the scanned project file.

    Raises:
        UsageError: If a pinned source is not registered.

    Returns:
        list: LookupRequest per package, in input order.
    """
    precedence = None
    requests = []
    for arg in packages:
        prefix, package = parse_package_arg(arg)
        pinned = args.SOURCE or prefix or default_source
        if pinned:
            source = source_by_name(pinned)
            if source is None:
                raise UsageError(f"Unknown source: {pinned}")
            sources = [source]
        else:
            if precedence is None:
                precedence = load_config(args.CONFIG).precedence
            sources = sources_from_names(precedence)

        if args.ALL:
            mode = LookupMode.ALL
        elif pinned:
            mode = LookupMode.EXPLICIT
        else:
            mode = LookupMode.DEFAULT
        requests.append(LookupRequest(package=package, sources=sources, mode=mode))
    return requests


def result_to_dict(result):
    data = result.to_dict()
    if result.status == Status.NOT_INSTALLED:
        commands = install_commands(result.package, result.available)
        if commands:
            data["install_commands"] = commands
    return data


def format_result(result, show_name):
    """Render one result as a human-readable line."""
    prefix = f"{result.package}: " if show_name else ""
    if result.status == Status.OUTDATED:
        return f"{prefix}{result.installed.version} → {result.latest.version} available"
    if result.status == Status.NOT_INSTALLED:
        avail = ", ".join(f"{v.version} in {v.source}" for v in result.available)
        return f"{prefix}not installed (available: {avail})"
    if result.status == Status.NOT_FOUND:
        return f"{prefix}not found"
    version = result.installed.version if result.installed else result.available[0].version
    return f"{prefix}{version}  ✓"


def print_json(results):
    payload = result_to_dict(results[0]) if len(results) == 1 else [result_to_dict(r) for r in results]
    print(json.dumps(payload, indent=2, ensure_ascii=False), file=sys.stdout)


def print_quiet(results):
    multi = len(results) > 1
    for r in results:
        info = r.installed or r.latest or (r.available[0] if r.available else None)
        if info is None:
            print(f"not found: {r.package}", file=sys.stderr)
        elif multi:
            print(f"{r.package}: {info.version}", file=sys.stdout)
        else:
            print(info.version, file=sys.stdout)


def print_all(results):
    multi = len(results) > 1
    indent = "  " if multi else ""
    for r in results:
        if multi:
            print(f"{r.package}:", file=sys.stdout)
        if not r.available:
            print(f"{indent}not found", file=sys.stderr)
            continue
        for v in r.available:
            mark = " (installed)" if v.local else ""
            print(f"{indent}{v.source}: {v.version}{mark}", file=sys.stdout)


def print_text(results):
    multi = len(results) > 1
    for r in results:
        line = format_result(r, multi)
        if r.status in (Status.NOT_FOUND, Status.NOT_INSTALLED):
            print(line, file=sys.stderr)
            if r.status == Status.NOT_INSTALLED:
                for cmd in install_commands(r.package, r.available):
                    print(f"  {cmd}", file=sys.stderr)
        else:
            print(line, file=sys.stdout)


def exit_code(results):
    """Map results to the process exit code."""
    if any(r.status in (Status.NOT_FOUND, Status.NOT_INSTALLED) for r in results):
        return ExitCodes.NOT_FOUND.value
    if any(r.status == Status.OUTDATED for r in results):
        return ExitCodes.OUTDATED.value
    return ExitCodes.SUCCESS.value


def run(args):
    """Execute the CLI for parsed ``args`` and return the exit code."""
    packages = list(args.packages)
    default_source = None
    if not packages:
        project = scan_project()
        if project is None:
            print("No project file found. Usage: latest <package> [...]", file=sys.stderr)
            return ExitCodes.NOT_FOUND.value
        if not args.JSON and not args.QUIET:
            print(f"Scanning {project.file_name}...", file=sys.stderr)
        packages = project.packages
        default_source = project.source

    try:
        requests = build_requests(args, packages, default_source)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        return ExitCodes.NOT_FOUND.value

    if is_debug_enabled(logger):
        logger.debug(
            "Built lookup requests",
            extra=extra_context(event="decision", component="cli", action="build_requests",
                                count=len(requests)),
        )

    use_cache = not args.NO_CACHE
    service = LookupService(
        cache=VersionCache() if use_cache else None,
        use_cache=use_cache,
        max_packages=Constants.MAX_PARALLEL_PACKAGES,
    )
    results = service.lookup_many(requests)

    if args.JSON:
        print_json(results)
    elif args.QUIET:
        print_quiet(results)
    elif args.ALL:
        print_all(results)
    else:
        print_text(results)

    return exit_code(results)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    sys.exit(run(args))

if __name__ == "__main__":
    main()
