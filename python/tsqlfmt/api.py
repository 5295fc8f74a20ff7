# coding:utf-8
'''
T-SQL formatter API and command line.
'''

import io
import os
import sys
import argparse
import traceback
from collections import namedtuple
import tsqlfmt
from tsqlfmt.config import LocalConfig
from tsqlfmt.formatter import SqlFormatter


TextEdit = namedtuple('TextEdit', 'start end new_text')


def format_document_edits(text, local_config=LocalConfig()):
    """
        Edits that turn text into its formatted form: one edit replacing
        the whole document, or none when nothing changes
    """
    formatted = tsqlfmt.format_sql(text, local_config)
    if formatted == text:
        return []
    return [TextEdit(0, len(text), formatted)]


def format_dir(indir, outdir, local_config):
    """
        Format every .sql file under [indir] into the same relative path under [outdir]
    """
    indir = indir.rstrip("/\\")
    outdir = outdir.rstrip("/\\")

    for file_name, full_path in find_all_sql_files(indir):
        _format_to(full_path, os.path.join(outdir, file_name), local_config)


def format_file(infile, outdir, local_config):
    """
        Format the SQL file [infile] into the folder [outdir]
    """
    _format_to(infile, os.path.join(outdir, os.path.basename(infile)), local_config)


def _format_to(in_path, out_path, local_config):
    try:
        sql = _read_file(in_path)
    except (IOError, UnicodeDecodeError):
        print(in_path)
        print(traceback.format_exc())
        return False

    formatter = SqlFormatter(local_config)
    try:
        results = formatter.format_blocks(sql)
        out_sql = formatter.render(sql, results)
    except Exception:  # pylint: disable=broad-except
        out_sql = sql + "\n/*" + traceback.format_exc() + "\n*/"
        out_path = os.path.join(os.path.dirname(out_path), "formaterror_" + os.path.basename(out_path))
    else:
        for index, result in enumerate(results):
            if result.fallback:
                print("%s: block %d (%s) left as written: %s"
                      % (in_path, index, result.block.kind.value, result.error.message))

    out_dir = os.path.dirname(out_path)
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir)
    _write_file(out_path, out_sql)
    return True


def find_all_sql_files(directory):
    for root, _, files in os.walk(directory):
        for file_name in files:
            if os.path.splitext(file_name)[1].lower() == ".sql":
                path = os.path.join(root, file_name)
                yield path[len(directory) + 1:], path


def _read_file(path):
    with io.open(path, "r", encoding="utf-8", newline="") as target_file:
        return target_file.read()


def _write_file(path, value):
    with io.open(path, "w", encoding="utf-8", newline="") as target_file:
        target_file.write(value)


def _parse_args(test_args=None):
    parser = argparse.ArgumentParser(description='T-SQL formatter', prog='tsqlfmt')

    parser.add_argument('-v', '--version', action='version', version='%(prog)s ' + tsqlfmt.__version__)
    parser.add_argument('input_path',
                        action='store',
                        type=str,
                        help='input directory path or input file path',
                        )
    parser.add_argument('output_path',
                        action='store',
                        type=str,
                        help='output path for formatted file(s).',
                        )
    parser.add_argument('-m', '--mode',
                        action='store',
                        default='file',
                        type=str,
                        choices=['file', 'directory'],
                        help='format target. default "file"',
                        )

    parser.add_argument('-N', '--nochange_case',
                        action='store_true',
                        help='UPPERCASE off.',
                        )
    parser.add_argument('-B', '--escapesequence_u005c',
                        action='store_true',
                        help='use backslash escapesequence.',
                        )
    parser.add_argument('-r', '--reserved_words_file_path',
                        action='store',
                        default=None,
                        type=str,
                        help='input reserved words file path.',
                        )
    parser.add_argument('-l', '--layout',
                        action='store',
                        default='river',
                        type=str,
                        choices=['legacy', 'river', 'indent'],
                        help='clause layout. default "river"',
                        )
    parser.add_argument('-R', '--river_column',
                        action='store',
                        default=7,
                        type=int,
                        help='column of the clause keywords in the river layout. default 7',
                        )
    parser.add_argument('-i', '--indent_size',
                        action='store',
                        default=4,
                        type=int,
                        help='indent size. default 4',
                        )
    parser.add_argument('-C', '--comma_position',
                        action='store',
                        default='before',
                        type=str,
                        choices=['before', 'after'],
                        help='comma position in lists. default "before"',
                        )

    return parser.parse_args(test_args)


def build_config(args):
    """
        LocalConfig from parsed command line arguments
    """
    local_config = LocalConfig() \
        .set_uppercase(not args.nochange_case) \
        .set_escape_sequence_u005c(args.escapesequence_u005c) \
        .set_layout(args.layout) \
        .set_river_column(args.river_column) \
        .set_indent_size(args.indent_size) \
        .set_comma_position(args.comma_position)
    if args.reserved_words_file_path is not None:
        local_config = local_config.set_input_reserved_words(
            read_reserved_words(args.reserved_words_file_path))
    return local_config


def read_reserved_words(reserved_words_file):
    try:
        with io.open(reserved_words_file, "r", encoding="utf-8") as target_file:
            lines = target_file.readlines()
    except IOError:
        print("File I/O error: %s" % reserved_words_file)
        print("Please check the file path.")
        sys.exit("Application quitting...")
    return [line.rstrip('\r\n') for line in lines]


def main(test_args=None):
    args = _parse_args(test_args)
    try:
        local_config = build_config(args)
    except ValueError as ex:
        sys.exit("Invalid option: %s" % ex)

    if args.mode == "file":
        format_file(args.input_path, args.output_path, local_config)
    else:
        format_dir(args.input_path, args.output_path, local_config)

    print("\n===== Finish the application =====")
    print("Output directory path : %s" % args.output_path)
    print("=====           End          =====")


if __name__ == "__main__":
    main()
