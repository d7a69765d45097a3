#!/usr/bin/env python3
"""
Session Demo: Inventory → Session → Scores → CSV / Chart

Shows the full workflow:
1. Build (or load) an inventory definition
2. Analyze it
3. Drive a respondent session through the widget descriptors
4. Export scores as CSV and draw the bar chart
"""

import logging
import sys

import matplotlib.pyplot as plt

from mai.analyzer import analyze_inventory
from mai.backends import ExportError, render_bar_chart, save_scores_csv
from mai.controls import navigation_controls, question_views
from mai.examples import build_example_inventory
from mai.export import format_score_lines, to_chart_series
from mai.serialization import load_inventory
from mai.session import SessionState


def main(argv):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    inventory = load_inventory(argv[1]) if len(argv) > 1 else build_example_inventory()

    print("=" * 70)
    print(f"INVENTORY: {inventory.name}")
    print("=" * 70)

    report = analyze_inventory(inventory)
    print(f"  Questions:  {report.total_questions}")
    print(f"  Categories: {report.total_categories}")
    print(f"  Pages:      {report.total_pages}")
    print(f"  Coverage:   {report.category_coverage_percent:.1f}%")

    session = SessionState(inventory)
    session.subscribe(lambda snap: print(f"  · page {snap.current_page + 1}, "
                                         f"{len(snap.unanswered)} unanswered"))

    # Endorse every other statement, page by page
    while True:
        print(f"\nPage {session.current_page + 1}/{session.total_pages} ({session.progress():.0f}%)")
        for view in question_views(session):
            print(f"  {view.number}. {view.statement}")
            if view.translation:
                print(f"     {view.translation}")
            choice = view.controls[0] if view.question.id % 2 == 0 else view.controls[1]
            choice.on_activate()

        forward = navigation_controls(session)[-1]
        forward.on_activate()
        if forward.label == "Submit":
            break

    scores = session.scores()
    print("\nYour Results")
    for line in format_score_lines(scores):
        print(f"  {line}")

    try:
        path = save_scores_csv(scores, inventory.name)
        print(f"\n✅ Scores exported to {path}")
    except ExportError as e:
        print(f"\n❌ {e}")
        return 1

    fig = render_bar_chart(to_chart_series(scores), inventory.chart_max, path=f"{inventory.name}_scores.png")
    plt.close(fig)
    print(f"✅ Chart saved to {inventory.name}_scores.png")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
