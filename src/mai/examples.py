"""
Example inventory builder for the shortened demo MAI form.

Builds the three-statement Metacognitive Awareness Inventory used by the
demo, with Chinese translations and one question per category.
"""
from mai.model import CategoryDefinition, CategoryMap, Inventory, QuestionBank

DEMO_STATEMENTS = [
    ("I ask myself periodically if I am meeting my goals.", "我会定期问自己是否达成目标"),
    ("I consider several alternatives to a problem before I answer.", "我会在回答问题前考虑几种可能的解决办法"),
    ("I try to use strategies that have worked in the past.", "我尝试使用过去有效的方法"),
]


def build_example_inventory(per_page: int = 10, chart_max: int = 3) -> Inventory:
    questions = QuestionBank.from_statements(DEMO_STATEMENTS)

    # 0-based ids: question 1 on the form is id 0
    categories = CategoryMap([
        CategoryDefinition("Knowledge about Cognition", frozenset({0})),
        CategoryDefinition("Procedural Knowledge", frozenset({1})),
        CategoryDefinition("Conditional Knowledge", frozenset({2})),
    ])

    return Inventory(
        name="MAI",
        questions=questions,
        categories=categories,
        per_page=per_page,
        chart_max=chart_max,
    )
