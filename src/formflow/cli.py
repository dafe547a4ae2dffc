"""
Command line interface for inspecting branching forms.

Usage:
    formflow next FORM --question ID [--answers FILE]
    formflow path FORM [--answers FILE] [--start ID]
    formflow values FORM --question ID
    formflow analyze FORM
    formflow dot FORM [--mode simple|detailed] [-o OUT]

FORM and the answers file are YAML, or JSON when the extension is .json.
"""
import argparse
import logging
import sys
from typing import List, Optional

from formflow.analyzer import analyze_form
from formflow.backends import DotMode, generate_dot, save_dot_file
from formflow.branching import path_progress, project_path, resolve_next
from formflow.eligibility import question_values
from formflow.model import END, QuestionIndex
from formflow.serialization import FormLoadError, load_answers, load_form


def _lookup(index: QuestionIndex, question_id: str):
    question = index.get(question_id)
    if question is None:
        print(f"Unknown question id: {question_id}", file=sys.stderr)
    return question


def cmd_next(args, index: QuestionIndex) -> int:
    question = _lookup(index, args.question)
    if question is None:
        return 1
    answers = load_answers(args.answers) if args.answers else {}
    target = resolve_next(question, index, answers)
    print("END" if target is END else target)
    return 0


def cmd_path(args, index: QuestionIndex) -> int:
    answers = load_answers(args.answers) if args.answers else {}
    path = project_path(index, answers, start_id=args.start)
    if not path:
        print("(empty path)")
        return 0
    for pos, question in enumerate(path, 1):
        progress = path_progress(path, question.id)
        print(f"{pos:>3}. {question.id:<20} {progress:5.1f}%  {question.title}")
    return 0


def cmd_values(args, index: QuestionIndex) -> int:
    question = _lookup(index, args.question)
    if question is None:
        return 1
    for value in question_values(question):
        print(value)
    return 0


def cmd_analyze(args, index: QuestionIndex) -> int:
    report = analyze_form(index)
    print(f"Questions:               {report.total_questions}")
    print(f"Branch rules:            {report.total_rules}")
    print(f"Questions with branching:{report.questions_with_branching}")
    print(f"Unreachable questions:   {', '.join(sorted(report.unreachable_questions)) or 'None'}")
    print(f"Has cycles:              {'YES' if report.has_cycles else 'NO'}")
    if report.warnings:
        print("Warnings:")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("No warnings")
    return 0


def cmd_dot(args, index: QuestionIndex) -> int:
    mode = DotMode(args.mode)
    if args.output:
        save_dot_file(index, args.output, mode=mode)
        print(f"Saved to: {args.output}")
    else:
        print(generate_dot(index, mode=mode))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="formflow", description="Inspect branching logic of a form")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("next", help="Resolve the question after QUESTION")
    p.add_argument("form")
    p.add_argument("--question", required=True)
    p.add_argument("--answers")
    p.set_defaults(func=cmd_next)

    p = sub.add_parser("path", help="Project the path through the form")
    p.add_argument("form")
    p.add_argument("--answers")
    p.add_argument("--start")
    p.set_defaults(func=cmd_path)

    p = sub.add_parser("values", help="List possible condition values of a question")
    p.add_argument("form")
    p.add_argument("--question", required=True)
    p.set_defaults(func=cmd_values)

    p = sub.add_parser("analyze", help="Report dangling targets, cycles and unreachable questions")
    p.add_argument("form")
    p.set_defaults(func=cmd_analyze)

    p = sub.add_parser("dot", help="Render the branch graph as Graphviz DOT")
    p.add_argument("form")
    p.add_argument("--mode", choices=[m.value for m in DotMode], default=DotMode.SIMPLE.value)
    p.add_argument("-o", "--output")
    p.set_defaults(func=cmd_dot)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        index = QuestionIndex(load_form(args.form))
        return args.func(args, index)
    except FormLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
