#!/usr/bin/env python3
"""
Demo: Generate Graphviz DOT diagrams from a branching form.

Shows both visualization modes (SIMPLE, DETAILED).
"""

from formflow.examples import build_feedback_form
from formflow.backends import generate_dot, save_dot_file, DotMode


def main():
    questions = build_feedback_form()

    print("=" * 80)
    print("DOT GENERATOR DEMO")
    print("=" * 80)

    for mode in DotMode:
        print(f"\n{mode.value.upper()} MODE:")
        print("-" * 80)

        print(generate_dot(questions, mode=mode))

        filename = f"form_{mode.value}.dot"
        save_dot_file(questions, filename, mode=mode)
        print(f"\nSaved to: {filename}")

    print("\n" + "=" * 80)
    print("To visualize the diagrams:")
    print("  dot -Tpng form_simple.dot -o form_simple.png")
    print("  dot -Tpng form_detailed.dot -o form_detailed.png")
    print("=" * 80)


if __name__ == "__main__":
    main()
