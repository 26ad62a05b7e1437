# Overview: Ledger transaction pages (list with filters, detail, summary, customer statement).

from flask import Blueprint, render_template

from ..api import ApiError
from ..decorators import require_login, require_permission
from ..models import TransactionType
from ..permissions import PERMISSIONS
from ..services import transactions_service
from .documents import customer_choices
from .helpers import arg, flash_api_error, list_args, pagination_for

transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")


@transactions_bp.get("")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def list_transactions():
    """
    Query params:
    - search, customer_id, supplier_id, transaction_type, start_date, end_date
    - page, limit
    """
    page, limit, search = list_args()
    filters = {
        "customer_id": arg("customer_id"),
        "supplier_id": arg("supplier_id"),
        "transaction_type": arg("transaction_type"),
        "start_date": arg("start_date"),
        "end_date": arg("end_date"),
    }
    try:
        result = transactions_service.list_transactions(page, limit, search, **filters)
    except ApiError as e:
        flash_api_error(e, "Failed to load transactions")
        result = None
    return render_template(
        "transactions/list.html",
        transactions=result.items if result else [],
        pagination=pagination_for(result) if result else None,
        search=search or "",
        filters=filters,
        transaction_types=TransactionType.ALL,
    )


@transactions_bp.get("/summary")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def transaction_summary():
    start_date = arg("start_date")
    end_date = arg("end_date")
    try:
        summary = transactions_service.get_transaction_summary(start_date, end_date)
    except ApiError as e:
        flash_api_error(e, "Failed to load transaction summary")
        summary = {}
    return render_template(
        "transactions/summary.html",
        summary=summary,
        start_date=start_date or "",
        end_date=end_date or "",
    )


@transactions_bp.get("/statement")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def customer_statement():
    """Running-balance statement for ?customer_id= over an optional date range."""
    customer_id = arg("customer_id")
    start_date = arg("start_date")
    end_date = arg("end_date")
    statement = None
    if customer_id:
        try:
            statement = transactions_service.get_customer_statement(customer_id, start_date, end_date)
        except ApiError as e:
            flash_api_error(e, "Failed to load customer statement")
    return render_template(
        "transactions/statement.html",
        customers=customer_choices(),
        customer_id=customer_id or "",
        start_date=start_date or "",
        end_date=end_date or "",
        statement=statement,
    )


@transactions_bp.get("/<transaction_id>")
@require_login
@require_permission(PERMISSIONS.SALES_READ)
def view_transaction(transaction_id):
    transaction = transactions_service.get_transaction(transaction_id)
    return render_template("transactions/detail.html", transaction=transaction)
