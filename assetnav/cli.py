import sys
import json
import logging
import argparse
from . import __version__
from .config import Settings, load_settings
from .doc_resolver import CATEGORY_ALIASES
from .errors import AssetNavError
from .identifiers import extract_job_number, normalize_drawing_number
from .service import DOCUMENT_MODES, AssetNavigator

def print_and_exit(msg):
    print(msg)
    sys.exit(0)

def print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))

def parse_fields(pairs):
    """Turn ["key=value", ...] into a dict."""
    fields = {}
    for pair in pairs or []:
        if "=" not in pair:
            print_and_exit(f"ERROR:Invalid field '{pair}' (expected key=value)")
        key, value = pair.split("=", 1)
        fields[key.strip()] = value.strip()
    return fields

def non_negative_int(value):
    """argparse type for depth options."""
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: '{value}'") from None
    if depth < 0:
        raise argparse.ArgumentTypeError(f"depth must be 0 or more, got {depth}")
    return depth

def make_navigator(args):
    """Build a navigator from settings, honouring --root and --settings."""
    settings = load_settings(settings_path=args.settings, root=args.root)
    return AssetNavigator(settings)

def cmd_folder(args):
    """Handle project folder lookup."""
    from .folder_resolver import resolve_project_folder
    navigator = make_navigator(args)
    name = args.name or navigator.registry.project_name(args.job)
    resolution = resolve_project_folder(navigator.asset_store, args.job, name)
    if resolution.found:
        print_and_exit(f"SUCCESS:{resolution.folder_name}")
    available = "|".join(resolution.available_folders)
    print_and_exit(f"ERROR:{resolution.message}" + (f"\nAVAILABLE:{available}" if available else ""))

def cmd_tree(args):
    """Handle project file tree command."""
    navigator = make_navigator(args)
    print_json(navigator.project_files(args.job, args.name, max_depth=args.depth))

def cmd_sidebar(args):
    """Handle sidebar projects command."""
    navigator = make_navigator(args)
    if args.depth is not None:
        navigator.settings = Settings(dict(navigator.settings.values, sidebar_depth=args.depth))
    print_json(navigator.sidebar_projects())

def cmd_doc(args):
    """Handle document path resolution command."""
    navigator = make_navigator(args)
    fields = parse_fields(args.field)
    path = navigator.open_document(args.category, fields,
                                   stored_path=args.stored_path,
                                   project_id=args.project_id,
                                   mode=args.mode)
    if path is None:
        print_and_exit("ERROR:No document available")
    print_and_exit(f"SUCCESS:{path}")

def cmd_job_number(args):
    job_number = extract_job_number(args.text)
    if job_number is None:
        print_and_exit(f"ERROR:No job number found in '{args.text}'")
    print_and_exit(f"SUCCESS:{job_number}")

def cmd_drawing_number(args):
    drawing_number = normalize_drawing_number(args.text)
    if drawing_number is None:
        print_and_exit(f"ERROR:No drawing number found in '{args.text}'")
    print_and_exit(f"SUCCESS:{drawing_number}")

def create_parser():
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='assetnav',
        description='Resolve project folders, file trees and document paths'
    )

    parser.add_argument('--version', '-V', action='version',
                       version=f'assetnav {__version__}')

    # Global options
    parser.add_argument('--root', help='Asset root directory')
    parser.add_argument('--settings', help='Settings file path')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log to stderr')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    folder_parser = subparsers.add_parser('folder', help='Find the folder for a job number')
    folder_parser.add_argument('job', help='Job number, e.g. U2524')
    folder_parser.add_argument('--name', help='Project name used to disambiguate')
    folder_parser.set_defaults(func=cmd_folder)

    tree_parser = subparsers.add_parser('tree', help='Print the file tree of a project')
    tree_parser.add_argument('job', help='Job number, e.g. U2524')
    tree_parser.add_argument('--name', help='Project name used to disambiguate')
    tree_parser.add_argument('--depth', type=non_negative_int,
                             help='Folder levels to expand (default: all)')
    tree_parser.set_defaults(func=cmd_tree)

    sidebar_parser = subparsers.add_parser('sidebar', help='Print the sidebar project listing')
    sidebar_parser.add_argument('--depth', type=non_negative_int, help='Folder levels to expand per project')
    sidebar_parser.set_defaults(func=cmd_sidebar)

    doc_parser = subparsers.add_parser('doc', help='Resolve the path of a document')
    doc_parser.add_argument(
        'category',
        choices=sorted(CATEGORY_ALIASES),
        help='Document category or dashboard module name'
    )
    doc_parser.add_argument(
        '--field', '-f',
        action='append',
        metavar='KEY=VALUE',
        help='Record field, e.g. dwgNo=R-1 (repeatable)'
    )
    doc_parser.add_argument('--stored-path', help='Path already stored for the document')
    doc_parser.add_argument('--project-id', help='Project id for /projects/ paths')
    doc_parser.add_argument(
        '--mode',
        choices=DOCUMENT_MODES,
        default='path',
        help='How to return Google Drive links: as stored, viewer, embed or download URL'
    )
    doc_parser.set_defaults(func=cmd_doc)

    job_parser = subparsers.add_parser('job-number', help='Extract a job number from text')
    job_parser.add_argument('text')
    job_parser.set_defaults(func=cmd_job_number)

    dwg_parser = subparsers.add_parser('drawing-number', help='Normalize a drawing number')
    dwg_parser.add_argument('text')
    dwg_parser.set_defaults(func=cmd_drawing_number)

    return parser

def main(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            handlers=[logging.StreamHandler(sys.stderr)],
        )

    # If no subcommand specified, show help
    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except AssetNavError as e:
        print_and_exit(f"ERROR:{e}")

if __name__ == "__main__":
    main()
