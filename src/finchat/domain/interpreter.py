"""Natural-language fallback for messages that are not formal commands.

Understands short sentences such as "Gastei 30 reais no supermercado" or
"Comprei café por 5 reais": the first number is the amount, the remaining
words (minus filler verbs and joining prepositions) are the description, and
the category is inferred from keywords. The result is always an expense.
Amounts may group thousands with dots and use a decimal comma ("1.500,00").
"""

import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from finchat.domain.entities import Category, CategoryType
from finchat.domain.intents import ExpenseDraft, ParseError
from finchat.utils.amount_parser import is_whole_cents, parse_amount

AMOUNT_NOT_FOUND = "Não consegui identificar o valor. Use: /add [valor] [descrição]"
SUB_CENT_AMOUNT = "Valor inválido. Use no máximo duas casas decimais"
DEFAULT_DESCRIPTION = "Despesa via Telegram"

_MONEY_PATTERN = re.compile(
    r"(?:r\$\s*)?(\d{1,3}(?:\.\d{3})+(?!\.?\d)(?:,\d+)?|\d+(?:[.,]\d+)?)\s*(?:(?:reais|real|brl)\b|r\$)?",
    re.IGNORECASE,
)
_THOUSANDS = re.compile(r"\d{1,3}(?:\.\d{3})+(?:,\d+)?")

FILLER_VERBS = frozenset({"gastei", "comprei", "paguei", "despesa"})
PREPOSITIONS = frozenset({"no", "na", "em", "por", "com", "de", "do", "da"})

FOOD_KEYWORDS = (
    "supermercado",
    "mercado",
    "comida",
    "almoço",
    "jantar",
    "café",
    "lanche",
    "restaurante",
)
TRANSPORT_KEYWORDS = (
    "uber",
    "taxi",
    "ônibus",
    "gasolina",
    "combustível",
    "estacionamento",
)

# (category-name substring, keywords); first matching rule wins
DEFAULT_KEYWORD_RULES: tuple[tuple[str, Sequence[str]], ...] = (
    ("alimenta", FOOD_KEYWORDS),
    ("transporte", TRANSPORT_KEYWORDS),
)


class CategoryMatcher(ABC):
    """Infers a category hint from free text."""

    @abstractmethod
    def classify(self, text: str) -> Optional[str]:
        """Return a substring expected in the category name, or None."""
        pass


class KeywordCategoryMatcher(CategoryMatcher):
    """Matches fixed keyword lists against the lower-cased text."""

    def __init__(self, rules: Sequence[tuple[str, Sequence[str]]] = DEFAULT_KEYWORD_RULES):
        self.rules = rules

    def classify(self, text: str) -> Optional[str]:
        lower_text = text.lower()
        for hint, keywords in self.rules:
            if any(keyword in lower_text for keyword in keywords):
                return hint
        return None


def find_expense_category(categories: Sequence[Category], hint: Optional[str]) -> Optional[Category]:
    """Return the first expense category whose name contains ``hint`` (case-insensitive)."""
    if not hint:
        return None
    needle = hint.lower()
    for category in categories:
        if category.category_type == CategoryType.EXPENSE and needle in category.name.lower():
            return category
    return None


def _extract_description(text: str, start: int, end: int) -> str:
    words = (text[:start] + " " + text[end:]).split()

    while words and words[0].lower() in FILLER_VERBS:
        words.pop(0)
    while words and words[0].lower() in PREPOSITIONS:
        words.pop(0)
    while words and words[-1].lower() in PREPOSITIONS:
        words.pop()

    return " ".join(words) or DEFAULT_DESCRIPTION


def interpret(
    text: str,
    categories: Sequence[Category],
    matcher: Optional[CategoryMatcher] = None,
) -> ExpenseDraft | ParseError:
    """Interpret free text as an expense.

    Args:
        text: Message text
        categories: The owner's categories
        matcher: Category matcher (defaults to KeywordCategoryMatcher)

    Returns:
        ExpenseDraft, or ParseError when no amount is present
    """
    match = _MONEY_PATTERN.search(text)
    if match is None:
        return ParseError(AMOUNT_NOT_FOUND)

    token = match.group(1)
    if _THOUSANDS.fullmatch(token):
        # Dots only group thousands here: 1.500 is fifteen hundred
        token = token.replace(".", "")

    try:
        amount = parse_amount(token)
    except ValueError:
        return ParseError(AMOUNT_NOT_FOUND)
    if not is_whole_cents(amount):
        return ParseError(SUB_CENT_AMOUNT)

    description = _extract_description(text, match.start(), match.end())

    matcher = matcher or KeywordCategoryMatcher()
    category = find_expense_category(categories, matcher.classify(text))

    return ExpenseDraft(amount=amount, description=description, category=category)
