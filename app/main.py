"""
Streamlit Frontend for Bill Splitter

Split a restaurant bill interactively:
1. Upload a bill JSON file, or type the items into the table
2. Set the date, place and tip percentage
3. See who owes what and download the result

The page goes through the same validator and splitting core as the CLI,
so what you see here is exactly what the CLI would write.
"""

import json
from datetime import date

import streamlit as st

from splitbill.audit import create_correlation_id
from splitbill.errors import BillFormatError
from splitbill.orchestrator import create_app_components


st.set_page_config(
    page_title="Bill Splitter",
    page_icon="🧾",
    layout="wide",
)

DEFAULT_ITEMS = [
    {"name": "Pizza", "price": 100.0, "isShared": True, "person": ""},
    {"name": "Coke", "price": 10.0, "isShared": False, "person": "Alice"},
    {"name": "Coffee", "price": 5.0, "isShared": False, "person": "Bob"},
]


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components(correlation_id=create_correlation_id())


def rows_to_raw_bill(bill_date: date, location: str, tip_percentage: float, rows: list[dict]) -> dict:
    """Turn edited table rows into the JSON shape the validator expects."""
    items = []
    for row in rows:
        if not row.get("name") and row.get("price") in (None, ""):
            continue
        item = {
            "name": row.get("name") or "",
            "price": float(row.get("price") or 0),
            "isShared": bool(row.get("isShared")),
        }
        if not item["isShared"]:
            item["person"] = row.get("person") or ""
        items.append(item)

    return {
        "date": bill_date.isoformat(),
        "location": location,
        "tipPercentage": tip_percentage,
        "items": items,
    }


def render_result(output) -> None:
    col1, col2, col3 = st.columns(3)
    col1.metric("Subtotal", f"{output.sub_total:,.1f}")
    col2.metric("Tip", f"{output.tip:,.1f}")
    col3.metric("Total", f"{output.total_amount:,.1f}")

    st.markdown(f"**{output.date}** · {output.location}")

    if not output.has_participants:
        st.warning("No personal items on this bill, so there is nobody to split it between.")
    else:
        st.table([{"Name": item.name, "Amount": item.amount} for item in output.items])

    st.download_button(
        "⬇️ Download result JSON",
        data=json.dumps(output.to_json_dict(), ensure_ascii=False, indent=2),
        file_name="split-result.json",
        mime="application/json",
    )


def main():
    """Main application entry point."""
    split_flow, _ = get_components()

    st.title("🧾 Bill Splitter")
    st.markdown("Shared items are split evenly, personal items go to their owner, tip is shared in proportion.")

    uploaded = st.sidebar.file_uploader("Load a bill JSON", type=["json"])

    if uploaded is not None:
        try:
            raw = json.loads(uploaded.read().decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            st.error(f"Could not read {uploaded.name}: {e}")
            st.stop()
    else:
        col1, col2, col3 = st.columns(3)
        with col1:
            bill_date = st.date_input("Date", value=date.today())
        with col2:
            location = st.text_input("Location", value="")
        with col3:
            tip_percentage = st.number_input("Tip %", min_value=0.0, value=10.0, step=1.0)

        rows = st.data_editor(
            DEFAULT_ITEMS,
            num_rows="dynamic",
            use_container_width=True,
            column_config={
                "name": st.column_config.TextColumn("Item"),
                "price": st.column_config.NumberColumn("Price", min_value=0.0),
                "isShared": st.column_config.CheckboxColumn("Shared"),
                "person": st.column_config.TextColumn("Person"),
            },
        )
        raw = rows_to_raw_bill(bill_date, location, tip_percentage, rows)

    if st.button("Split the bill", type="primary"):
        try:
            output = split_flow.split(raw, source=uploaded.name if uploaded else "editor")
        except BillFormatError as e:
            st.error(str(e))
            for issue in e.issues:
                st.markdown(f"- `{issue.field}`: {issue.message}")
            st.stop()

        render_result(output)


if __name__ == "__main__":
    main()
