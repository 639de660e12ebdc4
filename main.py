#!/usr/bin/env python3
from dataclasses import replace
import json
import logging
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from signal_decoder.analysis.report import AnalysisReport, analyze_string
from signal_decoder.config import DEFAULT_SETTINGS
from signal_decoder.utils.hexdump import hexdump

console = Console()


def print_banner():
    banner = """
    ╔═══════════════════════════════════════╗
    ║            Signal Decoder             ║
    ║   Deep dive into opaque identifiers   ║
    ╚═══════════════════════════════════════╝
    """
    console.print(Panel(banner, style="bold blue"))


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def read_input(text, use_stdin):
    """Resolve the TEXT argument or --stdin into the string to analyze"""
    if use_stdin:
        if text is not None:
            raise click.UsageError("Pass TEXT or --stdin, not both")
        data = click.get_text_stream('stdin').read()
        # Pipes and echo add one trailing newline that is not part of the token
        return data[:-1] if data.endswith('\n') else data
    if text is None:
        raise click.UsageError("Missing TEXT (or use --stdin)")
    return text


def build_settings(extended=False, min_pattern=None, max_patterns=None):
    overrides = {'extended_codecs': extended}
    if min_pattern is not None:
        overrides['min_pattern_length'] = min_pattern
    if max_patterns is not None:
        overrides['max_patterns'] = max_patterns
    try:
        return replace(DEFAULT_SETTINGS, **overrides)
    except ValueError as e:
        raise click.BadParameter(str(e))


def format_range(report: AnalysisReport) -> str:
    if report.min_code_point is None or report.max_code_point is None:
        return "n/a"
    return f"{report.min_code_point}–{report.max_code_point}"


def stats_table(report: AnalysisReport) -> Table:
    table = Table(title="Overview")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="bold")
    table.add_column("Notes", style="dim")
    table.add_row("Length", f"{report.length:,}", "Total characters")
    table.add_row("Unique characters", f"{report.unique_characters:,}", "Distinct symbols observed")
    table.add_row("Entropy", f"{report.entropy:.3f} bits", "Shannon entropy per symbol")
    table.add_row("Printable coverage", f"{report.printable_ratio:.2%}", "Printable characters vs total")
    table.add_row("Code point range", format_range(report),
                  "ASCII only" if report.ascii_only else "Contains characters above ASCII")
    return table


def composition_table(report: AnalysisReport) -> Table:
    table = Table(title="Composition")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    for tag, count in report.categories.items():
        table.add_row(tag.value, f"{count:,}")
    return table


def frequency_table(report: AnalysisReport, top: int) -> Table:
    table = Table(title=f"Frequencies (top {top})")
    table.add_column("Char", style="bold")
    table.add_column("Code", justify="right")
    table.add_column("Count", justify="right")
    table.add_column("Share", justify="right")
    for entry in report.frequencies[:top]:
        table.add_row(Text(entry.display), str(ord(entry.char)), f"{entry.count:,}", f"{entry.percentage / 100:.2%}")
    return table


def character_table(report: AnalysisReport) -> Table:
    table = Table(title="Character map")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Char", style="bold")
    table.add_column("Code", justify="right")
    table.add_column("Hex")
    table.add_column("Binary")
    table.add_column("Category", style="cyan")
    for detail in report.characters:
        table.add_row(str(detail.index), Text(detail.display), str(detail.code_point),
                      detail.hex_code, detail.binary_code, detail.category.value)
    return table


def encoding_table(attempts) -> Table:
    table = Table(title="Decoding attempts")
    table.add_column("Codec", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    for attempt in attempts:
        status = "[green]decoded[/green]" if attempt.success else "[red]not decoded[/red]"
        details = Text(attempt.message)
        if attempt.success:
            details.append(f"\nBytes: {attempt.byte_length}")
            if attempt.detected_format:
                details.append(f"\nFormat: {attempt.detected_format}")
            details.append(f"\nHex: {attempt.hex}")
            details.append(f"\nPreview: {attempt.decoded_preview}")
        table.add_row(attempt.label, status, details)
    return table


def print_insights(report: AnalysisReport):
    if report.insights:
        body = Text("\n".join(f"● {insight}" for insight in report.insights))
    else:
        body = Text("Add characters to generate insight hints.", style="dim")
    console.print(Panel(body, title="Insights"))
    if report.repeating_patterns:
        console.print(Panel(Text("  ".join(report.repeating_patterns)),
                            title="Repeating fragments detected"))


@click.group(context_settings={'auto_envvar_prefix': 'SIGNAL_DECODER'})
@click.option('--quiet', '-q', is_flag=True, help='Do not print the banner')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(quiet, verbose):
    """Signal Decoder - structure, entropy and encoding hints for opaque strings"""
    configure_logging(verbose)
    if not quiet:
        print_banner()


@cli.command()
@click.argument('text', required=False)
@click.option('--stdin', 'use_stdin', is_flag=True, help='Read the string from standard input')
@click.option('--top', default=8, show_default=True, type=click.IntRange(min=1), help='Frequency rows to show')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
@click.option('--extended', is_flag=True, help='Also try Base32 and Base58')
@click.option('--min-pattern', type=click.IntRange(min=2), help='Shortest repeating fragment to report')
@click.option('--max-patterns', type=click.IntRange(min=0), help='Maximum repeating fragments to report')
def analyze(text, use_stdin, top, as_json, extended, min_pattern, max_patterns):
    """Analyze a string: statistics, composition, patterns and decodings"""
    value = read_input(text, use_stdin)
    report = analyze_string(value, build_settings(extended, min_pattern, max_patterns))

    if as_json:
        click.echo(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
        return

    console.print(stats_table(report))
    if report.categories:
        console.print(composition_table(report))
    if report.frequencies:
        console.print(frequency_table(report, top))
    else:
        console.print("[dim]Provide a string to see frequency details.[/dim]")
    print_insights(report)
    console.print(encoding_table(report.encodings))


@cli.command()
@click.argument('text', required=False)
@click.option('--stdin', 'use_stdin', is_flag=True, help='Read the string from standard input')
@click.option('--codec', help='Only show the codec with this label (e.g. Hex)')
@click.option('--dump', is_flag=True, help='Hex dump every successful decoding')
@click.option('--extended', is_flag=True, help='Also try Base32 and Base58')
def decode(text, use_stdin, codec, dump, extended):
    """Run the decoder bank only"""
    value = read_input(text, use_stdin)
    attempts = analyze_string(value, build_settings(extended)).encodings

    if codec:
        attempts = tuple(a for a in attempts if a.label.casefold() == codec.casefold())
        if not attempts:
            raise click.BadParameter(f"unknown codec {codec!r}", param_hint='--codec')

    console.print(encoding_table(attempts))
    if dump:
        for attempt in attempts:
            if attempt.success and attempt.byte_length:
                console.print(Panel(Text(hexdump(bytes.fromhex(attempt.hex))), title=attempt.label))


@cli.command()
@click.argument('text', required=False)
@click.option('--stdin', 'use_stdin', is_flag=True, help='Read the string from standard input')
def chars(text, use_stdin):
    """Show the per-character breakdown"""
    report = analyze_string(read_input(text, use_stdin))
    if report.characters:
        console.print(character_table(report))
    else:
        console.print("[dim]Nothing to visualize yet.[/dim]")


if __name__ == '__main__':
    cli()
