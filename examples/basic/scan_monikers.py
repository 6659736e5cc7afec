"""Find moniker ranges in a document and list their versions."""

from monikers import CollectingSink, scan

source = """\
# Install

:::moniker range="netcore-3.0"
Run `dotnet tool install`.
:::moniker-end

::::moniker range=">= netcore-3.1" (preview)
Use the new installer.
::::moniker-end
"""

sink = CollectingSink()
doc = scan(source, sink=sink, source_file="install.md")

for block in doc.monikers:
    print(f"lines {block.span}: {block.moniker_range!r} ({block.status.name})")

for diagnostic in sink.diagnostics:
    print(f"warning: {diagnostic}")
