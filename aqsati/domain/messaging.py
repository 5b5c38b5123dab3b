"""Prompt construction for reminder messages and portfolio reports"""

import re
from typing import List
from urllib.parse import quote

from aqsati.domain.models import ClientSummary, ReminderContext, ReportClientLine, ReportContext, PortfolioTotals
from aqsati.domain.status import status_label

_LANGUAGE_NAMES = {"ar": "Arabic", "en": "English"}

_PHONE_NOISE = re.compile(r"[\s+()-]")


def _language(locale: str) -> str:
    return _LANGUAGE_NAMES.get(locale, "English")


def reminder_context(summary: ClientSummary) -> ReminderContext:
    client = summary.client
    return ReminderContext(
        name=client.name,
        phone=client.phone,
        total=client.total,
        paid=summary.paid,
        remaining=summary.remaining,
        months=client.months,
        start_date=client.start_date,
        end_date=summary.end_date,
    )


def report_context(totals: PortfolioTotals, summaries: List[ClientSummary], locale: str) -> ReportContext:
    return ReportContext(
        totals=totals,
        clients=[
            ReportClientLine(
                name=s.client.name,
                total=s.client.total,
                paid=s.paid,
                remaining=s.remaining,
                status=status_label(s.status.tier, locale),
            )
            for s in summaries
        ],
    )


def build_reminder_prompt(ctx: ReminderContext, locale: str = "ar") -> str:
    """Prompt for a short, friendly payment reminder"""
    language = _language(locale)
    return (
        f"You are an assistant creating a friendly payment reminder for a client in {language}.\n\n"
        f"Client Name: {ctx.name}\n"
        f"Remaining Amount: {ctx.remaining:g}\n"
        f"Plan: {ctx.months} monthly installments from {ctx.start_date} to {ctx.end_date}\n\n"
        "Instructions:\n"
        f"1. Start with a friendly greeting addressing {ctx.name} by name.\n"
        "2. Write a simple and polite sentence reminding the client of their outstanding payment.\n"
        "3. Clearly state the remaining amount.\n"
        "4. End with a polite closing thanking the client for their cooperation.\n"
        "5. Keep the message short, friendly and professional. Do not add any extra information.\n"
        "Reply with the message text only."
    )


def build_report_prompt(ctx: ReportContext, locale: str = "ar") -> str:
    """Prompt for a portfolio analysis with summary, insights and recommendations"""
    language = _language(locale)
    totals = ctx.totals
    collected_pct = (totals.total_paid / totals.total_receivables * 100) if totals.total_receivables > 0 else 0.0

    client_lines = "\n".join(
        f"- Client: {c.name}, Status: {c.status}, Remaining: {c.remaining:g}" for c in ctx.clients
    )

    return (
        "You are an expert financial analyst. Write a smart, insightful financial report "
        f"in {language} based on the following data. Be concise, easy to read and actionable.\n\n"
        "Data Overview:\n"
        f"- Total Receivables: {totals.total_receivables:g}\n"
        f"- Total Paid: {totals.total_paid:g}\n"
        f"- Total Outstanding: {totals.total_outstanding:g}\n"
        f"- Collected: {collected_pct:.1f}%\n"
        f"- Number of Clients: {totals.client_count}\n\n"
        "Client Details:\n"
        f"{client_lines or '- (no clients)'}\n\n"
        "The report must include these sections:\n"
        "1. Overall Summary: a brief high-level view including the percentage of collected funds.\n"
        "2. Key Insights: the top 2-3 clients by outstanding balance, the number of late clients, "
        "and positive trends such as fully paid clients.\n"
        "3. Recommendations: 1-2 concrete, actionable recommendations in an encouraging, professional tone.\n\n"
        "Format the report as a single markdown block."
    )


def whatsapp_link(phone: str, message: str) -> str:
    """wa.me deep link with the phone cleaned of formatting characters"""
    clean_phone = _PHONE_NOISE.sub("", phone)
    return f"https://wa.me/{clean_phone}?text={quote(message, safe='')}"
