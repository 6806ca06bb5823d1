# -------------------------------------
# variantgroup CLI entry point
# -------------------------------------
"""
CLI entry point for variant group expansion.

Usage:
    python -m variantgroup "text-(center red)" "outline-(~ 2)"
    python -m variantgroup --file classes.txt --join
    python -m variantgroup --config classes.yml --set button

Nothing is written to stdout unless every requested token and class set
expanded cleanly.
"""
import argparse
import sys

from .classes import Classes
from .expander import ExpandError, Group, Lit, expand, format_error, scan_token, _selftest
from .loader import ConfigError, class_sets, read_tokens


def _tree_lines(root, indent: int = 0) -> list[str]:
    out: list[str] = []
    stack = [(root, indent)]
    while stack:
        node, depth = stack.pop()
        pad = "  " * depth
        if isinstance(node, str):
            out.append(f"{pad}TAIL")
        elif isinstance(node, Lit):
            out.append(f"{pad}LIT  {node.text!r}")
        elif isinstance(node, Group):
            out.append(f"{pad}GROUP {node.prefix!r} {node.sep} @{node.offset}")
            if node.tail is not None:
                stack.append((node.tail, depth + 1))
                stack.append(("TAIL", depth))
            stack.extend((m, depth + 1) for m in reversed(node.members))
        else:
            out.append(f"{pad}BARE")
    return out


def _format(names: list[str], args) -> list[str]:
    if args.classes:
        return [str(Classes(names))]
    if args.join:
        return [" ".join(names)]
    return list(names)


def _main(argv=None) -> int:
    p = argparse.ArgumentParser(
        prog="variantgroup",
        description="Expand variant group class notation into flat class names.",
    )
    p.add_argument("tokens", nargs="*", metavar="TOKEN", help="Raw class tokens, e.g. 'text-(center red)'")
    p.add_argument("--file", "-f", metavar="PATH", help="Read tokens from a text file, one per line")
    p.add_argument("--config", "-c", metavar="PATH", help="YAML file with a 'classes:' mapping of named class sets")
    p.add_argument("--set", "-s", dest="set_name", metavar="NAME", help="Only expand this class set (with --config)")
    p.add_argument("--join", "-j", action="store_true", help="Print expanded classes on one space-joined line")
    p.add_argument("--classes", action="store_true", help="Print the de-duplicated class attribute value")
    p.add_argument("--tree", action="store_true", help="Print the scanned group structure instead of expanding")
    p.add_argument("--selftest", action="store_true", help="Run selftest and exit")
    args = p.parse_args(argv)

    if args.selftest:
        _selftest()
        print("selftest: OK")
        return 0

    if args.set_name and not args.config:
        p.error("--set requires --config")

    tokens = list(args.tokens)
    if args.file:
        try:
            tokens.extend(read_tokens(args.file))
        except OSError as e:
            print(f"error: cannot read '{args.file}': {e}", file=sys.stderr)
            return 2

    if not tokens and not args.config:
        p.error("no tokens given (pass TOKEN arguments, --file or --config)")

    sets = {}
    if args.config and not args.tree:
        try:
            sets = class_sets(args.config)
        except (OSError, ConfigError) as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        if args.set_name:
            if args.set_name not in sets:
                print(f"error: no class set named '{args.set_name}' in '{args.config}'", file=sys.stderr)
                return 2
            sets = {args.set_name: sets[args.set_name]}

    lines: list[str] = []
    try:
        if args.tree:
            for token in tokens:
                lines.append(token)
                for node in scan_token(token):
                    lines.extend(_tree_lines(node, 1))
        else:
            if tokens:
                lines.extend(_format(expand(tokens), args))
            for name, set_tokens in sets.items():
                lines.append(f"{name}: {' '.join(expand(set_tokens))}")
    except ExpandError as e:
        print(format_error(e), file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
