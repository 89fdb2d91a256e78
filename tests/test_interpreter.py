"""Tests for the natural-language expense interpreter."""

from datetime import datetime
from decimal import Decimal

from finchat.domain.entities import Category, CategoryType, TransactionType
from finchat.domain.interpreter import (
    AMOUNT_NOT_FOUND,
    DEFAULT_DESCRIPTION,
    SUB_CENT_AMOUNT,
    CategoryMatcher,
    KeywordCategoryMatcher,
    find_expense_category,
    interpret,
)
from finchat.domain.intents import ExpenseDraft, ParseError


def _category(category_id, name, category_type=CategoryType.EXPENSE):
    return Category(
        id=category_id,
        owner_id="owner-1",
        name=name,
        category_type=category_type,
        created_at=datetime(2024, 1, 1),
    )


CATEGORIES = (
    _category(1, "Alimentação"),
    _category(2, "Transporte"),
    _category(3, "Alimentação extra", CategoryType.INCOME),
)


def test_interpret_supermarket_sentence():
    """Filler verb and joining preposition are dropped from the description."""
    result = interpret("Gastei 30 reais no supermercado", CATEGORIES)

    assert isinstance(result, ExpenseDraft)
    assert result.amount == Decimal("30")
    assert result.description == "supermercado"
    assert result.category == CATEGORIES[0]
    assert result.transaction_type == TransactionType.EXPENSE


def test_interpret_amount_after_description():
    result = interpret("Comprei café por 5 reais", CATEGORIES)

    assert result.amount == Decimal("5")
    assert result.description == "café"
    assert result.category.name == "Alimentação"


def test_interpret_currency_prefix_and_comma_decimal():
    result = interpret("R$ 12,50 uber", CATEGORIES)

    assert result.amount == Decimal("12.50")
    assert result.description == "uber"
    assert result.category.name == "Transporte"


def test_interpret_without_description_uses_placeholder():
    result = interpret("30 reais", CATEGORIES)

    assert result.description == DEFAULT_DESCRIPTION
    assert result.category is None


def test_interpret_without_amount():
    """No digits at all means there is nothing to record."""
    assert interpret("uber para casa", CATEGORIES) == ParseError(AMOUNT_NOT_FOUND)


def test_interpret_keyword_without_matching_category():
    """A keyword hit with no such category leaves the expense uncategorized."""
    result = interpret("Gastei 20 no restaurante", (_category(2, "Transporte"),))

    assert result.category is None


def test_interpret_with_custom_matcher():
    class AlwaysTransport(CategoryMatcher):
        def classify(self, text):
            return "transp"

    result = interpret("Paguei 8 na padaria", CATEGORIES, matcher=AlwaysTransport())

    assert result.description == "padaria"
    assert result.category.name == "Transporte"


def test_keyword_matcher_first_rule_wins():
    matcher = KeywordCategoryMatcher()

    assert matcher.classify("uber até o restaurante") == "alimenta"
    assert matcher.classify("gasolina") == "transporte"
    assert matcher.classify("cinema") is None


def test_find_expense_category_ignores_income_and_empty_hint():
    income_only = (_category(3, "Alimentação extra", CategoryType.INCOME),)

    assert find_expense_category(income_only, "alimenta") is None
    assert find_expense_category(CATEGORIES, "") is None
    assert find_expense_category(CATEGORIES, None) is None
    assert find_expense_category(CATEGORIES, "TRANSP") == CATEGORIES[1]


def test_interpret_thousands_separator():
    result = interpret("Paguei 1.500,00 de aluguel", CATEGORIES)

    assert result.amount == Decimal("1500.00")
    assert result.description == "aluguel"


def test_interpret_dot_groups_thousands_without_cents():
    assert interpret("Gastei 1.500 no mercado", CATEGORIES).amount == Decimal("1500")
    assert interpret("Gastei 10.50 no uber", CATEGORIES).amount == Decimal("10.50")


def test_interpret_rejects_fractions_of_a_cent():
    assert interpret("Comprei bala por 0,005", CATEGORIES) == ParseError(SUB_CENT_AMOUNT)
