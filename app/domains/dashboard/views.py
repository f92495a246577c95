"""
Server-rendered HTML for the transaction dashboard.

The page is plain HTML with inline styles and no scripts: search is a GET
form and every pagination button is a link back to /dashboard.
"""

from html import escape
from typing import List, Optional
from urllib.parse import urlencode

from pydantic import BaseModel

from app.domains.dashboard.presenter import (
    INCOMING,
    classify_direction,
    format_amount,
    format_date,
    page_window,
    showing_range,
)
from app.domains.transactions.models import Transaction

COLUMNS = ["Transaction ID", "Sender", "Receiver", "Amount", "Currency", "Cause", "Created At", "Direction"]

STYLE = """
body { margin: 0; background: #f8fafc; padding: 20px;
       font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif; }
.container { max-width: 1200px; margin: 0 auto; }
.header { margin-bottom: 32px; text-align: center; padding: 24px; color: white; border-radius: 16px;
          background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
.header h1 { margin: 0 0 8px 0; font-size: 32px; }
.header p { margin: 0; opacity: 0.9; }
.card { background: #fff; border-radius: 12px; box-shadow: 0 4px 12px rgba(0,0,0,0.08); }
.search { margin-bottom: 20px; padding: 16px; }
.search form { display: flex; gap: 12px; align-items: center; }
.search input { flex: 1; padding: 12px 16px; border: 2px solid #e5e7eb; border-radius: 8px; font-size: 14px; }
.btn { padding: 8px 16px; border: 2px solid #e5e7eb; border-radius: 6px; background: white; color: #374151;
       font-size: 14px; text-decoration: none; }
.btn.primary, .btn.active { background: #3b82f6; color: white; border-color: #3b82f6; }
.btn.disabled { background: #f9fafb; color: #9ca3af; border-color: #f3f4f6; pointer-events: none; }
.error { padding: 16px; background: #fef2f2; border: 1px solid #fecaca; border-radius: 8px; color: #dc2626;
         margin-bottom: 20px; font-size: 14px; }
.info { padding: 12px 16px; background: #eff6ff; border: 1px solid #bfdbfe; border-radius: 8px; color: #1d4ed8;
        margin-bottom: 20px; font-size: 14px; }
.empty { padding: 40px; text-align: center; color: #6b7280; }
table { width: 100%; border-collapse: collapse; min-width: 800px; }
th { text-align: left; padding: 16px 12px; font-size: 14px; color: #374151; border-bottom: 2px solid #e5e7eb;
     background: #f8fafc; }
td { padding: 16px 12px; font-size: 14px; border-bottom: 1px solid #f3f4f6; vertical-align: top; }
td.id { font-family: monospace; font-size: 13px; }
td.amount { font-weight: 600; text-align: right; }
.badge { padding: 4px 12px; border-radius: 20px; font-size: 12px; font-weight: 600; }
.badge.incoming { color: #059669; background: #ecfdf5; }
.badge.outgoing { color: #dc2626; background: #fef2f2; }
.pagination { display: flex; flex-direction: column; gap: 16px; align-items: center; margin-top: 20px; padding: 16px; }
.pagination .controls { display: flex; gap: 8px; }
"""


class DashboardPage(BaseModel):
    transactions: List[Transaction] = []
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 1
    query: str = ""
    error: Optional[str] = None
    current_account_id: Optional[str] = None
    locale: str = "en_US"
    title: str = "YaYa Wallet Transaction Dashboard"


def page_url(page: int, query: str = "") -> str:
    params = {"p": page}
    if query:
        params["q"] = query
    return f"/dashboard?{urlencode(params)}"


def render_row(tx: Transaction, current_account_id: Optional[str], locale: str) -> str:
    direction = classify_direction(tx, current_account_id)
    badge = "incoming" if direction == INCOMING else "outgoing"
    return (
        "<tr>"
        f'<td class="id">{escape(tx.id)}</td>'
        f"<td>{escape(tx.sender)}</td>"
        f"<td>{escape(tx.receiver)}</td>"
        f'<td class="amount">{escape(format_amount(tx.amount, tx.currency, locale))}</td>'
        f"<td>{escape(tx.currency)}</td>"
        f"<td>{escape(tx.cause)}</td>"
        f"<td>{escape(format_date(tx.created_at, locale))}</td>"
        f'<td><span class="badge {badge}">{direction}</span></td>'
        "</tr>"
    )


def render_table(view: DashboardPage) -> str:
    if not view.transactions:
        return (
            '<div class="card empty">'
            '<div style="font-size: 16px; margin-bottom: 8px;">No transactions found</div>'
            '<div style="font-size: 14px; color: #9ca3af;">Try adjusting your search criteria</div>'
            "</div>"
        )

    header = "".join(f"<th>{name}</th>" for name in COLUMNS)
    rows = "".join(render_row(tx, view.current_account_id, view.locale) for tx in view.transactions)
    return (
        '<div class="card" style="overflow-x: auto;">'
        f"<table><thead><tr>{header}</tr></thead><tbody>{rows}</tbody></table>"
        "</div>"
    )


def render_pagination(view: DashboardPage) -> str:
    if not view.transactions:
        return ""

    start, end = showing_range(view.page, view.limit, view.total)

    def link(label, page, css="btn", enabled=True):
        if not enabled:
            return f'<span class="{css} disabled">{label}</span>'
        return f'<a class="{css}" href="{escape(page_url(page, view.query))}">{label}</a>'

    buttons = [link("Previous", view.page - 1, enabled=view.page > 1)]
    for number in page_window(view.page, view.total_pages):
        buttons.append(link(str(number), number, "btn active" if number == view.page else "btn"))
    buttons.append(link("Next", view.page + 1, enabled=view.page < view.total_pages))

    return (
        '<div class="card pagination">'
        f'<div style="font-size: 14px; color: #6b7280;">Showing {start} to {end} of {view.total} transactions</div>'
        f'<div class="controls">{"".join(buttons)}</div>'
        "</div>"
    )


def render_dashboard(view: DashboardPage) -> str:
    query = escape(view.query)
    clear = '<a class="btn" href="/dashboard">Clear</a>' if view.query else ""
    error = f'<div class="error"><strong>Error:</strong> {escape(view.error)}</div>' if view.error else ""

    search_info = ""
    if view.query:
        found = f" ({view.total} results found)" if view.total > 0 else ""
        search_info = f'<div class="info">Search results for: <strong>"{query}"</strong>{found}</div>'

    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>{escape(view.title)}</title>
    <style>{STYLE}</style>
  </head>
  <body>
    <div class="container">
      <div class="header">
        <h1>{escape(view.title)}</h1>
        <p>Monitor and search your transaction history</p>
      </div>
      <div class="card search">
        <form method="get" action="/dashboard">
          <input type="text" name="q" value="{query}"
                 placeholder="Search by sender, receiver, cause, or transaction ID...">
          <button class="btn primary" type="submit">Search</button>
          {clear}
        </form>
      </div>
      {error}
      {search_info}
      {render_table(view)}
      {render_pagination(view)}
    </div>
  </body>
</html>
"""
