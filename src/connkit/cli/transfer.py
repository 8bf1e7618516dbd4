"""``import`` and ``export`` subcommands."""

from __future__ import annotations

import argparse
from pathlib import Path

from connkit.cli.common import open_store
from connkit.exporters import (
    ExportOptions,
    ExportSource,
    get_exporter,
    list_exporters,
    parse_format,
)
from connkit.importers import get_importer, list_importers
from connkit.merge import merge_import


def configure_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    import_parser = subparsers.add_parser("import", help="Import connections from another tool")
    import_parser.set_defaults(func=run_import)
    import_parser.add_argument(
        "--format", dest="import_format", required=True, choices=list_importers()
    )
    import_parser.add_argument("file", type=Path, help="File (or Remmina directory) to import")

    export_parser = subparsers.add_parser("export", help="Export connections for another tool")
    export_parser.set_defaults(func=run_export)
    export_parser.add_argument(
        "--format", dest="export_format", required=True, choices=list_exporters()
    )
    export_parser.add_argument(
        "--output", "-o", type=Path, required=True, help="Output file (directory for Remmina)"
    )
    export_parser.add_argument(
        "--no-groups",
        dest="include_groups",
        action="store_false",
        help="Do not write group structure",
    )


def run_import(args: argparse.Namespace) -> int:
    from connkit.cli.ui import console, print_warning_list

    importer = get_importer(args.import_format)
    result = importer.import_path(args.file)

    console.print("Import Summary:")
    console.print(f"  Connections imported: {len(result.connections)}")
    console.print(f"  Groups imported: {len(result.groups)}")
    console.print(f"  Entries skipped: {len(result.skipped)}")
    console.print(f"  Errors: {len(result.errors)}")
    print_warning_list("Skipped entries:", [str(s) for s in result.skipped])
    print_warning_list("Errors:", result.errors)

    report = merge_import(open_store(args.settings), result)

    console.print()
    console.print("Merge results:")
    console.print(f"  New connections added: {report.new_connections}")
    console.print(f"  New groups added: {report.new_groups}")
    console.print(f"  Total connections: {report.total_connections}")
    console.print(f"  Total groups: {report.total_groups}")
    return 0


def run_export(args: argparse.Namespace) -> int:
    from connkit.cli.ui import console, print_warning_list

    export_format = parse_format(args.export_format)
    options = ExportOptions(
        format=export_format,
        output_path=args.output,
        include_groups=args.include_groups,
    )
    source = ExportSource.from_document(open_store(args.settings).snapshot())
    result = get_exporter(export_format).export(source, options)

    console.print(
        f"Export complete: {result.exported_count} connections exported, "
        f"{result.skipped_count} skipped"
    )
    print_warning_list("Warnings:", result.warnings)
    if result.output_files:
        console.print()
        console.print("Output files:")
        for path in result.output_files:
            console.print(f"  {path}", markup=False)
    return 0
