"""
Main CLI application for VML drawing extraction.
"""

import argparse
import sys
from dotenv import load_dotenv

from .config import load_config
from .docx_extractor import DocxVmlExtractor
from .vml import convert_path


def extract_command(args):
    """Handle the extract subcommand."""
    print(f"Extracting drawings from: {args.input}")

    extractor = DocxVmlExtractor(args.input, config=load_config(args.config))
    extractor.save_to_json(args.output)

    print(f"Drawing data saved to: {args.output}")


def render_command(args):
    """Handle the render subcommand."""
    print(f"Rendering drawings from: {args.input}")

    extractor = DocxVmlExtractor(args.input, config=load_config(args.config))
    written = extractor.render_svgs(args.output)

    print(f"Rendered {len(written)} drawings")
    print(f"SVG files saved to: {args.output}")


def convert_path_command(args):
    """Handle the convert-path subcommand."""
    print(convert_path(args.path))


def main():
    """Main entry point for the CLI."""
    # Load environment variables from .env file
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Convert VML drawings in Word documents to SVG-ready shape trees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s extract input.docx -o drawings.json
  %(prog)s render input.docx -o svg_out
  %(prog)s convert-path "m0,0l12700,25400e"
        """
    )
    parser.add_argument('-c', '--config', help='YAML config file (default: $VML_SHAPES_CONFIG)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Extract command
    extract_parser = subparsers.add_parser(
        'extract',
        help='Extract VML drawings to JSON'
    )
    extract_parser.add_argument('input', help='Input .docx file')
    extract_parser.add_argument('-o', '--output', required=True, help='Output JSON file')
    extract_parser.set_defaults(func=extract_command)

    # Render command
    render_parser = subparsers.add_parser(
        'render',
        help='Render VML drawings to SVG files'
    )
    render_parser.add_argument('input', help='Input .docx file')
    render_parser.add_argument('-o', '--output', required=True, help='Output directory')
    render_parser.set_defaults(func=render_command)

    # Convert path command
    path_parser = subparsers.add_parser(
        'convert-path',
        help='Convert the coordinates of a VML path string'
    )
    path_parser.add_argument('path', help='VML path, e.g. "m0,0l100,200e"')
    path_parser.set_defaults(func=convert_path_command)

    # Parse arguments
    args = parser.parse_args()

    # Execute command
    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
