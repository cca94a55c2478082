"""
Streamlit Frontend for Balance Book

The dashboard a small-business owner uses to keep their books:
transactions, invoices, bank accounts, inventory, alerts and
the BalanceBot advisor.

DESIGN PRINCIPLES:
1. Every figure is shown in the chosen reporting currency
2. Scanned receipts only pre-fill the form; the user saves them
3. Clear error messages in simple language
4. Visual feedback for all operations

Run with: streamlit run app/main.py
"""

import asyncio
import base64
import logging
from datetime import date, timedelta
from decimal import Decimal

import streamlit as st
from pydantic import ValidationError

from balance_book.audit import create_correlation_id
from balance_book.config import get_settings, validate_all_settings
from balance_book.currency import (
    CURRENCIES,
    convert,
    converted_balances,
    exchange_rate,
    format_money,
    total_liquidity,
)
from balance_book.models.ledger import (
    InvoiceStatus,
    Theme,
    TransactionCategory,
    TransactionType,
    UserProfile,
)
from balance_book.models.advisor import Attachment, ChatRole
from balance_book.models.notification import NotificationSeverity
from balance_book.orchestrator import AdvisorBusyError, AppComponents, create_app_components
from balance_book.reports import (
    expenses_by_category,
    filter_products,
    filter_transactions,
    monthly_cash_flow,
    outstanding_invoices,
    summarize_transactions,
    total_receivables,
)
from balance_book.services.storage import StorageError
from balance_book.tools import GstMode, calculate_emi, calculate_gst
from balance_book.validation import (
    build_account,
    build_invoice,
    build_product,
    build_transaction,
)


# Page configuration
st.set_page_config(
    page_title="Balance Book",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .info-box {
        padding: 20px;
        background-color: #cce5ff;
        border-radius: 10px;
        border-left: 5px solid #004085;
        margin: 10px 0;
    }
    .warning-box {
        padding: 20px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        margin: 10px 0;
    }
    .error-box {
        padding: 20px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)

SEVERITY_BOXES = {
    NotificationSeverity.INFO: "info-box",
    NotificationSeverity.WARNING: "warning-box",
    NotificationSeverity.DANGER: "error-box",
}

INVOICE_STATUS_ICONS = {
    InvoiceStatus.UNPAID: "🕒",
    InvoiceStatus.PAID: "✅",
    InvoiceStatus.OVERDUE: "⚠️",
}


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> AppComponents:
    """Get or create application components (cached)."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if get_settings().app.debug_mode else logging.INFO,
    )
    try:
        return create_app_components()
    except StorageError as e:
        st.error(f"Failed to open saved data: {e}")
        st.stop()


def main():
    """Main application entry point."""
    components = get_components()
    components.notifications.refresh()

    currency = components.preferences.reporting_currency
    unread = components.notifications.unread_count

    # Sidebar navigation
    st.sidebar.title("📒 Balance Book")
    profile = components.preferences.user_profile
    if profile:
        st.sidebar.caption(f"{profile.name} · {profile.role}")
    st.sidebar.markdown("---")

    pages = [
        "📊 Dashboard",
        "💸 Transactions",
        "🧾 Invoices",
        "🏦 Accounts",
        "📦 Inventory",
        f"🔔 Notifications ({unread})" if unread else "🔔 Notifications",
        "🤖 AI Advisor",
        "🧮 Tools",
        "⚙️ Settings",
    ]
    page = st.sidebar.radio("Navigate to:", pages, index=0)

    st.sidebar.markdown("---")
    codes = components.rates.codes
    selected = st.sidebar.selectbox(
        "Reporting currency",
        options=codes,
        index=codes.index(currency) if currency in codes else 0,
        format_func=lambda code: CURRENCIES[code].label if code in CURRENCIES else code,
    )
    if selected != currency:
        components.preferences.reporting_currency = selected
        st.rerun()

    # Route to appropriate page
    if page.startswith("📊"):
        render_dashboard_page(components, currency)
    elif page.startswith("💸"):
        render_transactions_page(components, currency)
    elif page.startswith("🧾"):
        render_invoices_page(components, currency)
    elif page.startswith("🏦"):
        render_accounts_page(components, currency)
    elif page.startswith("📦"):
        render_inventory_page(components, currency)
    elif page.startswith("🔔"):
        render_notifications_page(components)
    elif page.startswith("🤖"):
        render_advisor_page(components)
    elif page.startswith("🧮"):
        render_tools_page(currency)
    elif page.startswith("⚙️"):
        render_settings_page(components)


def render_dashboard_page(components: AppComponents, currency: str):
    """Render the overview page."""
    ledger = components.ledger
    st.title("📊 Dashboard")

    summary = summarize_transactions(ledger.get_transactions())
    liquidity = total_liquidity(ledger.get_accounts(), currency, components.rates)
    receivables = total_receivables(ledger.get_invoices())

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Liquidity", format_money(liquidity, currency))
    col2.metric("Income", format_money(summary.total_income, currency))
    col3.metric("Expenses", format_money(summary.total_expense, currency))
    col4.metric("Receivables", format_money(receivables, currency))

    st.subheader("Income vs Expense")
    months = monthly_cash_flow(ledger.get_transactions())
    if months:
        st.area_chart(
            [
                {"month": m.month, "income": float(m.income), "expense": float(m.expense)}
                for m in months
            ],
            x="month",
            y=["income", "expense"],
        )
    else:
        st.info("No transactions recorded yet.")

    st.markdown("---")
    left, right = st.columns(2)

    with left:
        st.subheader("Expenses by Category")
        groups = expenses_by_category(ledger.get_transactions())
        if groups:
            st.bar_chart(
                [{"category": c.value, "amount": float(total)} for c, total in groups.items()],
                x="category",
                y="amount",
            )
        else:
            st.info("No expenses recorded yet.")

    with right:
        st.subheader("Recent Transactions")
        for transaction in ledger.get_transactions()[:5]:
            sign = "+" if transaction.type == TransactionType.INCOME else "-"
            st.markdown(
                f"**{transaction.description}** · {transaction.entry_date.isoformat()} · "
                f"{sign}{format_money(transaction.amount, currency)}"
            )


def render_transactions_page(components: AppComponents, currency: str):
    """Render the transactions list, the entry form and the receipt scanner."""
    ledger = components.ledger
    st.title("💸 Transactions")

    if "transaction_draft" not in st.session_state:
        st.session_state.transaction_draft = None

    upload_settings = get_settings().app

    # Receipt scan pre-fills the form
    with st.expander("📷 Scan a receipt"):
        uploaded_file = st.file_uploader(
            "Choose a receipt photo",
            type=upload_settings.supported_formats_list,
        )
        if uploaded_file and uploaded_file.size > upload_settings.max_upload_size_bytes:
            st.error(f"That photo is too large. The limit is {upload_settings.max_upload_size_mb} MB.")
        elif uploaded_file and st.button("🔍 Read Receipt", type="primary"):
            with st.spinner("Reading your receipt... Please wait."):
                try:
                    draft = run_async(
                        components.receipt_flow.scan(
                            uploaded_file.read(),
                            uploaded_file.type,
                            correlation_id=create_correlation_id(),
                        )
                    )
                except ValidationError:
                    st.error("That file type is not supported. Please upload a JPEG, PNG or WEBP image.")
                    draft = None
                else:
                    if draft is None:
                        st.warning("Could not read that receipt. Please fill in the form by hand.")
            st.session_state.transaction_draft = draft

    draft = st.session_state.transaction_draft
    categories = list(TransactionCategory)
    types = list(TransactionType)

    with st.form("new_transaction", clear_on_submit=True):
        st.subheader("Add Transaction")
        description = st.text_input("Description", value=draft.description if draft else "")
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input(
                f"Amount ({currency})",
                min_value=0.0,
                value=float(draft.amount) if draft else 0.0,
                step=1.0,
            )
            txn_type = st.selectbox(
                "Type",
                options=types,
                index=types.index(draft.type) if draft else types.index(TransactionType.EXPENSE),
                format_func=lambda t: t.value,
            )
        with col2:
            category = st.selectbox(
                "Category",
                options=categories,
                index=categories.index(draft.category) if draft else categories.index(TransactionCategory.OTHER),
                format_func=lambda c: c.value,
            )
            entry_date = st.date_input("Date", value=draft.entry_date if draft else date.today())

        if st.form_submit_button("💾 Save Transaction", type="primary"):
            if not description.strip():
                st.error("Please enter a description.")
            else:
                ledger.add_transaction(
                    build_transaction(description, amount, txn_type, category, entry_date)
                )
                st.session_state.transaction_draft = None
                st.rerun()

    st.markdown("---")
    search = st.text_input("Search", placeholder="Description or category")
    transactions = filter_transactions(ledger.get_transactions(), search)
    if not transactions:
        st.info("No transactions match.")

    for transaction in transactions:
        col1, col2, col3 = st.columns([5, 2, 1])
        col1.markdown(
            f"**{transaction.description}**  \n"
            f"{transaction.entry_date.isoformat()} · {transaction.category.value} · "
            f"{transaction.status.value}"
        )
        sign = "+" if transaction.type == TransactionType.INCOME else "-"
        col2.markdown(f"{sign}{format_money(transaction.amount, currency)}")
        if col3.button("🗑️", key=f"del-txn-{transaction.id}"):
            ledger.delete_transaction(transaction.id)
            st.rerun()


def render_invoices_page(components: AppComponents, currency: str):
    """Render the invoice list and the new-invoice form."""
    ledger = components.ledger
    st.title("🧾 Invoices")

    invoices = ledger.get_invoices()
    outstanding = outstanding_invoices(invoices)
    st.metric(
        "Outstanding",
        format_money(total_receivables(invoices), currency),
        help=f"{len(outstanding)} invoice(s) not yet paid",
    )

    with st.form("new_invoice", clear_on_submit=True):
        st.subheader("Create Invoice")
        customer = st.text_input("Customer name")
        due_date = st.date_input("Due date", value=date.today() + timedelta(days=30))
        col1, col2, col3, col4 = st.columns(4)
        item_description = col1.text_input("Item")
        quantity = col2.number_input("Quantity", min_value=0.0, value=1.0, step=1.0)
        unit_price = col3.number_input(f"Unit price ({currency})", min_value=0.0, value=0.0)
        tax_rate = col4.number_input("Tax %", min_value=0.0, value=0.0)

        if st.form_submit_button("💾 Create Invoice", type="primary"):
            if not customer.strip():
                st.error("Please enter a customer name.")
            else:
                invoice = build_invoice(
                    customer,
                    due_date,
                    [{
                        "description": item_description,
                        "quantity": quantity,
                        "unit_price": unit_price,
                        "tax_rate": tax_rate,
                    }],
                )
                ledger.add_invoice(invoice)
                st.rerun()

    st.markdown("---")
    for invoice in invoices:
        col1, col2, col3, col4 = st.columns([4, 2, 2, 1])
        col1.markdown(
            f"**#{invoice.invoice_number}** · {invoice.customer_name}  \n"
            f"Issued {invoice.issue_date.isoformat()} · Due {invoice.due_date.isoformat()}"
        )
        col2.markdown(f"{format_money(invoice.total_amount, currency)} · {invoice.status.value}")
        for status in InvoiceStatus:
            if status == invoice.status:
                continue
            if col3.button(
                f"{INVOICE_STATUS_ICONS[status]} Mark as {status.value}",
                key=f"{status.value}-{invoice.id}",
            ):
                ledger.update_invoice(invoice.model_copy(update={"status": status}))
                st.rerun()
        if col4.button("🗑️", key=f"del-inv-{invoice.id}"):
            ledger.delete_invoice(invoice.id)
            st.rerun()


def render_accounts_page(components: AppComponents, currency: str):
    """Render bank accounts, total liquidity and the currency converter."""
    ledger = components.ledger
    rates = components.rates
    st.title("🏦 Accounts")

    accounts = ledger.get_accounts()
    st.metric("Total Liquidity", format_money(total_liquidity(accounts, currency, rates), currency))

    for account, converted in converted_balances(accounts, currency, rates):
        col1, col2, col3 = st.columns([4, 3, 1])
        col1.markdown(f"**{account.bank_name}**  \n{account.account_number}")
        col2.markdown(
            f"{format_money(account.balance, account.currency)}  \n"
            f"≈ {format_money(converted, currency)}"
        )
        if col3.button("🗑️", key=f"del-acc-{account.id}"):
            ledger.delete_account(account.id)
            st.rerun()

    with st.form("new_account", clear_on_submit=True):
        st.subheader("Add Account")
        bank_name = st.text_input("Bank name")
        account_number = st.text_input("Account number", placeholder="**** 1234")
        col1, col2 = st.columns(2)
        balance = col1.number_input("Balance", min_value=0.0, value=0.0)
        account_currency = col2.selectbox("Currency", options=rates.codes)
        if st.form_submit_button("💾 Add Account", type="primary"):
            if not bank_name.strip():
                st.error("Please enter a bank name.")
            else:
                ledger.add_account(build_account(bank_name, account_number, balance, account_currency))
                st.rerun()

    st.markdown("---")
    st.subheader("Currency Converter")
    col1, col2, col3 = st.columns(3)
    amount = col1.number_input("Amount", min_value=0.0, value=100.0)
    from_code = col2.selectbox("From", options=rates.codes, key="convert-from")
    to_code = col3.selectbox(
        "To",
        options=rates.codes,
        index=rates.codes.index(currency) if currency in rates.codes else 0,
        key="convert-to",
    )
    result = convert(Decimal(str(amount)), from_code, to_code, rates)
    st.markdown(
        f"**{format_money(Decimal(str(amount)), from_code)} = {format_money(result, to_code)}**  \n"
        f"1 {from_code} = {exchange_rate(from_code, to_code, rates):.4f} {to_code}"
    )


def render_inventory_page(components: AppComponents, currency: str):
    """Render products with stock controls."""
    ledger = components.ledger
    st.title("📦 Inventory")

    search = st.text_input("Search", placeholder="Name or SKU")
    for product in filter_products(ledger.get_products(), search):
        col1, col2, col3, col4, col5 = st.columns([4, 2, 1, 1, 1])
        flag = " ⚠️" if product.is_low_stock else ""
        col1.markdown(f"**{product.name}**{flag}  \nSKU {product.sku}")
        col2.markdown(
            f"{product.stock} in stock (min {product.low_stock_threshold})  \n"
            f"{format_money(product.price, currency)}"
        )
        if col3.button("➖", key=f"dec-{product.id}"):
            ledger.update_stock(product.id, -1)
            st.rerun()
        if col4.button("➕", key=f"inc-{product.id}"):
            ledger.update_stock(product.id, 1)
            st.rerun()
        if col5.button("🗑️", key=f"del-prod-{product.id}"):
            ledger.delete_product(product.id)
            st.rerun()

    with st.form("new_product", clear_on_submit=True):
        st.subheader("Add Product")
        col1, col2 = st.columns(2)
        name = col1.text_input("Name")
        sku = col2.text_input("SKU")
        col3, col4, col5 = st.columns(3)
        stock = col3.number_input("Stock", min_value=0, value=0, step=1)
        price = col4.number_input(f"Price ({currency})", min_value=0.0, value=0.0)
        threshold = col5.number_input("Low stock at", min_value=0, value=10, step=1)
        if st.form_submit_button("💾 Add Product", type="primary"):
            if not name.strip():
                st.error("Please enter a product name.")
            else:
                ledger.add_product(build_product(name, sku, stock, price, threshold))
                st.rerun()


def render_notifications_page(components: AppComponents):
    """Render the notification tray."""
    center = components.notifications
    st.title("🔔 Notifications")

    notifications = center.notifications
    if not notifications:
        st.info("You're all caught up.")
        return

    if center.unread_count and st.button("Mark all as read"):
        center.mark_all_read()
        st.rerun()

    for notification in notifications:
        box = SEVERITY_BOXES[notification.severity]
        status = "" if notification.read else " · <strong>new</strong>"
        st.markdown(f"""
        <div class="{box}">
            <h4>{notification.title}</h4>
            <p>{notification.message}</p>
            <small>{notification.created_at:%Y-%m-%d}{status}</small>
        </div>
        """, unsafe_allow_html=True)
        if not notification.read and st.button("Mark as read", key=f"read-{notification.id}"):
            center.mark_read(notification.id)
            st.rerun()


def render_advisor_page(components: AppComponents):
    """Render the BalanceBot conversation."""
    flow = components.advisor_flow
    st.title("🤖 AI Advisor")
    st.markdown("Ask BalanceBot about your cash flow, expenses or unpaid invoices.")

    for message in flow.history:
        with st.chat_message("assistant" if message.role == ChatRole.AI else "user"):
            st.markdown(message.content)

    image = st.file_uploader(
        "Attach an image (optional)",
        type=get_settings().app.supported_formats_list,
        key="advisor-image",
    )
    question = st.chat_input("Ask a question...", disabled=flow.busy)

    if question:
        attachment = None
        if image is not None:
            attachment = Attachment(
                mime_type=image.type,
                data_base64=base64.b64encode(image.read()).decode("ascii"),
            )
        with st.spinner("BalanceBot is thinking..."):
            try:
                run_async(flow.answer(question, attachment))
            except AdvisorBusyError:
                st.warning("Please wait for the previous answer.")
        st.rerun()


def render_tools_page(currency: str):
    """Render the EMI and GST calculators."""
    st.title("🧮 Tools")
    emi_tab, gst_tab = st.tabs(["EMI Calculator", "GST Calculator"])

    with emi_tab:
        col1, col2, col3 = st.columns(3)
        principal = col1.number_input(f"Loan amount ({currency})", min_value=0.0, value=100000.0)
        rate = col2.number_input("Annual interest %", min_value=0.0, value=10.0)
        years = col3.number_input("Tenure (years)", min_value=1, value=5, step=1)
        emi = calculate_emi(Decimal(str(principal)), Decimal(str(rate)), int(years))
        col1.metric("Monthly EMI", format_money(emi.monthly_payment, currency))
        col2.metric("Total Interest", format_money(emi.total_interest, currency))
        col3.metric("Total Payment", format_money(emi.total_payment, currency))

    with gst_tab:
        col1, col2, col3 = st.columns(3)
        amount = col1.number_input(f"Amount ({currency})", min_value=0.0, value=1000.0)
        gst_rate = col2.selectbox("GST rate %", options=[5, 12, 18, 28], index=2)
        mode = col3.radio(
            "Amount is",
            options=list(GstMode),
            format_func=lambda m: "Before GST" if m == GstMode.EXCLUSIVE else "Including GST",
        )
        gst = calculate_gst(Decimal(str(amount)), Decimal(gst_rate), mode)
        col1.metric("Net", format_money(gst.net_amount, currency))
        col2.metric("GST", format_money(gst.gst_amount, currency))
        col3.metric("Total", format_money(gst.total_amount, currency))


def render_settings_page(components: AppComponents):
    """Render profile, appearance, data and connection settings."""
    preferences = components.preferences
    st.title("⚙️ Settings")

    st.markdown("### Profile")
    profile = preferences.user_profile
    with st.form("profile"):
        name = st.text_input("Name", value=profile.name if profile else "")
        email = st.text_input("Email", value=profile.email if profile else "")
        role = st.text_input("Role", value=profile.role if profile else "Owner")
        if st.form_submit_button("💾 Save Profile"):
            try:
                preferences.user_profile = UserProfile(name=name, email=email, role=role)
            except ValidationError as e:
                st.error(f"Please check the profile details: {e.errors()[0]['msg']}")
            else:
                st.success("Profile saved.")
    if profile and st.button("Sign out"):
        preferences.sign_out()
        st.rerun()

    st.markdown("### Appearance")
    theme = preferences.theme
    if st.button(f"Switch to {'light' if theme == Theme.DARK else 'dark'} theme"):
        preferences.toggle_theme()
        st.rerun()
    st.caption(f"Current theme: {theme.value}")

    st.markdown("### Data")
    if st.button("Reset to demo data"):
        components.ledger.reset_to_demo()
        st.rerun()

    with st.expander("Recent activity"):
        for event in components.audit_storage.get_recent_events(limit=20):
            st.markdown(f"`{event.timestamp:%H:%M:%S}` {event.description}")

    st.markdown("---")
    st.markdown("### Connection Status")

    status = validate_all_settings()
    services = [
        ("Gemini (AI Advisor)", "gemini"),
        ("Local Storage", "storage"),
        ("App Settings", "app"),
    ]
    for label, key in services:
        if status.get(key, False):
            st.success(f"✅ {label} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {label} - {error}")

    st.caption(f"Environment: {get_settings().app.app_environment}")
    st.markdown(
        "To configure the application, create a `.env` file with your API keys. "
        "See `.env.example` for the required variables."
    )


if __name__ == "__main__":
    main()
