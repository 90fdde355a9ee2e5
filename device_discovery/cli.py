"""CLI entry point for the device discovery client.

    device-discover [-v] [-p PORT] [-t SECONDS] [-f table|json|yaml]
    python -m device_discovery [options]
"""

import sys

import click

from .discovery.session import (
    BROADCAST_ADDRESS,
    DEFAULT_DISCOVERY_PORT,
    DEFAULT_TIMEOUT,
    DiscoveryConfig,
    DiscoverySession,
)
from .errors import DiscoveryError
from .reporting.json_reporter import JsonReporter
from .reporting.table_reporter import TableReporter

# Timeouts are unsigned 64-bit seconds; the session clamps what the socket cannot hold
MAX_TIMEOUT_ARGUMENT = 2**64 - 1


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Echo the configuration before discovery.")
@click.option(
    "-p", "--port",
    type=click.IntRange(0, 65535),
    default=DEFAULT_DISCOVERY_PORT,
    show_default=True,
    help="UDP port the probe is sent to.",
)
@click.option(
    "-t", "--timeout",
    type=click.IntRange(0, MAX_TIMEOUT_ARGUMENT),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for each reply.",
)
@click.option(
    "--deadline/--no-deadline",
    default=False,
    help="Bound the whole session by the timeout instead of each receive.",
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--broadcast-address",
    default=BROADCAST_ADDRESS,
    show_default=True,
    help="Destination address for the probe.",
)
def main(verbose, port, timeout, deadline, output_format, broadcast_address):
    """Broadcast a discovery probe and list the devices that answer."""
    config = DiscoveryConfig(
        port=port,
        timeout=timeout,
        broadcast_address=broadcast_address,
        strict_deadline=deadline,
        verbose=verbose,
    )

    if config.verbose:
        click.echo(f"Verbose {str(config.verbose).lower()}")
        click.echo(f"Port {config.port}")
        click.echo(f"Timeout {config.timeout}sec")

    with DiscoverySession(config) as session:
        try:
            session.start()

            if output_format == "table":
                reporter = TableReporter()
                click.echo(reporter.header())
                for record, address in session.responses():
                    click.echo(reporter.row(record, address))
            else:
                _print_report(session, config, output_format)

        except KeyboardInterrupt:
            click.echo("Discovery interrupted by user", err=True)
            sys.exit(130)

        except DiscoveryError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)


def _print_report(session: DiscoverySession, config: DiscoveryConfig, output_format: str) -> None:
    """Collect replies and print one structured report.

    Devices received before a receive failure are still reported.
    """
    reporter = JsonReporter()
    devices = []
    try:
        for device in session.responses():
            devices.append(device)
    finally:
        report = reporter.generate(devices, config)
        if output_format == "json":
            click.echo(reporter.to_json_string(report))
        else:
            click.echo(reporter.to_yaml_string(report), nl=False)


if __name__ == "__main__":
    main()
