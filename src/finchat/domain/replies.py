"""Chat reply texts."""

from decimal import Decimal
from typing import Optional, Sequence

from finchat.domain.entities import Account, Category, MonthlyReport, TransactionType
from finchat.domain.errors import DomainError, InstallmentWriteFailed, StoreError
from finchat.utils.amount_parser import format_brl

UNCATEGORIZED = "⚠️ Sem categoria"
NO_ACCOUNTS = "❌ Nenhuma conta encontrada."
SAVE_FAILED = "Erro ao salvar transação. Tente novamente."
INSTALLMENTS_FAILED = "Erro ao salvar as parcelas. Confira suas transações antes de tentar novamente."
TRY_AGAIN = "O processamento demorou demais. Tente novamente em instantes."
INTERNAL_ERROR = "Internal error"
NO_MESSAGE_TEXT = "No message text"
NOT_CONFIGURED = "User not configured"

HELP_TEXT = '''🤖 *Comandos Disponíveis:*

/add [valor] [descrição] [categoria]
📝 Adicionar despesa
Ex: /add 50.00 almoço alimentação

/balance
💰 Ver saldo das contas

/report
📊 Relatório mensal

/help
❓ Esta ajuda

Você também pode enviar mensagens como:
"Gastei 30 reais no supermercado"
"Comprei café por 5 reais"'''

_TYPE_LABELS = {
    TransactionType.EXPENSE: "Despesa",
    TransactionType.INCOME: "Receita",
}


def entry_confirmation(
    transaction_type: TransactionType,
    amount: Decimal,
    description: str,
    category: Optional[Category],
    account_name: str,
    installment_total: int = 1,
) -> str:
    """Confirmation for a materialized expense or income."""
    label = _TYPE_LABELS.get(transaction_type, "Transação")
    if installment_total > 1:
        headline = f"✅ {label} parcelada: {installment_total}x de {format_brl(amount)}"
    else:
        headline = f"✅ {label} registrada: {format_brl(amount)}"

    lines = [headline, f"📝 {description}"]
    lines.append(f"🏷️ {category.name}" if category is not None else UNCATEGORIZED)
    lines.append(f"🏦 {account_name}")
    return "\n".join(lines)


def transfer_confirmation(amount: Decimal, from_name: str, to_name: str) -> str:
    return f"✅ Transferência realizada: {format_brl(amount)}\n🏦 {from_name} → {to_name}"


def balance_summary(accounts: Sequence[Account]) -> str:
    """List account balances and their total."""
    if not accounts:
        return NO_ACCOUNTS

    lines = ["💰 *Saldo das Contas:*", ""]
    total = Decimal("0")
    for account in accounts:
        lines.append(f"🏦 {account.name}: {format_brl(account.balance)}")
        total += account.balance
    lines.append("")
    lines.append(f"💎 *Total:* {format_brl(total)}")
    return "\n".join(lines)


def monthly_report(report: MonthlyReport) -> str:
    marker = "✅" if report.net >= 0 else "⚠️"
    return (
        "📊 *Relatório do Mês*\n\n"
        f"💚 Receitas: {format_brl(report.income)}\n"
        f"❌ Despesas: {format_brl(report.expenses)}\n"
        f"{marker} Saldo: {format_brl(report.net)}"
    )


def error_message(error: Exception) -> str:
    """User-facing text for a failed operation; never exposes internals."""
    if isinstance(error, InstallmentWriteFailed):
        return INSTALLMENTS_FAILED
    if isinstance(error, StoreError):
        return SAVE_FAILED
    if isinstance(error, DomainError):
        return str(error)
    return INTERNAL_ERROR
