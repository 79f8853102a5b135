#!/usr/bin/env python3
"""
Quick Start Guide for the nodetree-xml parser.

Parses a small backup configuration, reads values out of the tree, and shows
how parse failures are reported.
"""

from nodetree_xml import ParserConfig, XMLParser, XMLParserError, parse_lines

CONFIG_SOURCE = """\
# Rotating backup configuration
<param frequency="60" depth='3' />

<!-- Directories are copied recursively,
     files one at a time. -->
<Directory path="/home/user/documents" />
<Directory
    path="/home/user/projects" />
<File path="/etc/hosts" />
<Note author="ops">Backups older than depth are deleted.</Note>
"""


def quick_start_example():
    """Parse a configuration and read it back."""

    print("QUICK START - nodetree-xml")
    print("=" * 45)

    # Step 1: Parse
    print("\nStep 1: Parsing")
    print("-" * 30)

    parser = XMLParser()
    result = parser.parse_string(CONFIG_SOURCE)
    summary = result.summary()
    print(f"Read {summary['lines_read']} lines, "
          f"{summary['lines_merged']} merged into a preceding line")
    print(f"Built {summary['nodes_created']} nodes")

    # Step 2: Query
    print("\nStep 2: Reading values")
    print("-" * 30)

    root = parser.get_root_node()
    param = root.get_child_of_type("PARAM")
    print(f"frequency = {param.get_property_value('frequency')}")
    print(f"depth     = {param.get_property_value('depth')}")

    for directory in root.get_children_of_type("directory"):
        print(f"directory: {directory.get_property_value('path')}")
    for file_node in root.get_children_of_type("file"):
        print(f"file:      {file_node.get_property_value('path')}")

    note = root.get_child_of_type("note")
    print(f"note:      {note.get_loose_inner()}")

    # Step 3: Dump
    print("\nStep 3: Tree dump")
    print("-" * 30)
    for line in parser.dump_tree():
        print(line)

    # Step 4: Errors
    print("\nStep 4: Error reporting")
    print("-" * 30)
    for bad in (["<A><B></A>"], ['<A b="c>'], ["<A b>"]):
        try:
            parse_lines(bad)
        except XMLParserError as e:
            print(f"{type(e).__name__}: {e}")

    # Step 5: Configuration
    print("\nStep 5: Lenient configuration")
    print("-" * 30)
    lenient = parse_lines(["<Open>", "text"], config=ParserConfig.lenient())
    print(f"Unclosed element kept: {lenient.root.get_child_of_type('open')}")


if __name__ == "__main__":
    quick_start_example()
