#!/usr/bin/env python3
"""
Demo: Walk the feedback form under different answer sets.

Shows:
1. Next-question resolution for each answered question
2. The projected path and progress percentages
3. The diagnostics report
4. The form exported to YAML
"""

from formflow.analyzer import analyze_form
from formflow.branching import path_progress, project_path, resolve_next
from formflow.examples import build_feedback_form
from formflow.model import END
from formflow.serialization import form_to_yaml


SCENARIOS = {
    "Not a user": {"used": "No"},
    "Happy user": {"used": "Yes", "features": ["Reports"], "rating": 5},
    "API user": {"used": "Yes", "features": ["Reports", "API"], "rating": 4},
    "Billing complaint": {"used": "Yes", "rating": 1, "complaint": "Billing charged me twice"},
}


def main():
    questions = build_feedback_form()

    print("=" * 70)
    print("BRANCHING DEMO: Feedback form")
    print("=" * 70)

    for name, answers in SCENARIOS.items():
        print(f"\n{name}: {answers}")
        path = project_path(questions, answers)
        for question in path:
            target = resolve_next(question, questions, answers)
            progress = path_progress(path, question.id)
            print(f"  {progress:5.1f}%  {question.id:<10} -> {'END' if target is END else target}")

    report = analyze_form(questions)
    print("\nDIAGNOSTICS")
    print(f"  Questions: {report.total_questions}, rules: {report.total_rules}")
    print(f"  Ends form: {', '.join(report.ends_form)}")
    for warning in report.warnings or ["No warnings"]:
        print(f"  - {warning}")

    with open("feedback_form.yaml", "w") as f:
        f.write(form_to_yaml(questions, "Feedback"))
    print("\nForm exported to feedback_form.yaml")


if __name__ == "__main__":
    main()
