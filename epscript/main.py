"""Uses the ep language implementation to interpret .ep files/run in command-line mode. Also uses error handling context
manager. Called from the ep executable script and `python -m epscript`.
"""

import argparse

from epscript.lang.error import ErrorHandler
from epscript.lang.grammar import display
from epscript.lang.lexical import tokenize
from epscript.lang.session import Session, read_source
from epscript.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="ep", description="Interpreter for the ep prefix-notation language.")
    parser.add_argument("file", help="file to interpret and run", nargs="?")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="go to command-line mode (after running file, if given)")
    parser.add_argument("--lenient", action="store_true",
                        help="skip unrecognized characters with a warning instead of failing")
    parser.add_argument("--legacy-lexer", action="store_true",
                        help="tokenize with the original single-pattern lexer")

    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("--tokens", action="store_true", help="print the tokens of file instead of running it")
    dump.add_argument("--ast", action="store_true", help="print the syntax tree of file instead of running it")
    return parser


def main(argv=None):
    """Runs ep interpreter. Called from ep executable script."""
    with ErrorHandler() as error_handler:
        parser = build_parser()
        args = parser.parse_args(argv)

        if args.file is None and not args.interactive:
            parser.error("a source file is required (or -i for command-line mode)")
        if args.file is None and (args.tokens or args.ast):
            parser.error("--tokens and --ast need a source file")

        if args.file is not None and args.tokens:
            error_handler.register_file(args.file)
            source = read_source(args.file)
            error_handler.register_line(args.file, source, 1)

            for token in tokenize(source, lenient=args.lenient, legacy=args.legacy_lexer, on_gap=error_handler.warn):
                print(f"{token.kind:<8} {token.text}")
            return

        if args.file is not None:
            sess = Session(error_handler, args.file, lenient=args.lenient, legacy=args.legacy_lexer)

            if args.ast:
                for __, __, forest in sess.to_exec:
                    for node in forest:
                        print(display(node))
                return

            sess.run()

        if args.interactive:
            if args.file is None:
                sess = Session(error_handler, Session.SH_FILE, cmd_line=True, lenient=args.lenient,
                               legacy=args.legacy_lexer)
            else:
                sess.path = Session.SH_FILE
                sess.cmd_line = True
                error_handler.register_file(Session.SH_FILE)
                error_handler.fatal = False
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
