import streamlit as st
import pandas as pd
from typing import Any, Dict, List


def format_amount(amount: float) -> str:
    return f"{amount:.2f} €"


def render_summary_section(summary: Dict[str, Any], taxes: List[Dict[str, Any]]) -> None:
    """
    Render totals and who pays what

    Args:
        summary: BillSummary payload returned by the API
        taxes: Taxes of the bill, used to label the per-tax amounts
    """
    st.subheader("💰 Summary")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Subtotal", format_amount(summary["subtotal"]))
    with col2:
        st.metric("Taxes", format_amount(summary["total_tax"]))
    with col3:
        st.metric("Grand Total", format_amount(summary["grand_total"]))

    if taxes:
        with st.expander("🔍 Tax breakdown"):
            for tax in taxes:
                amount = summary["per_tax"].get(tax["id"], 0.0)
                label = f"{tax['value']:g}%" if tax["kind"] == "percentage" else "fixed"
                st.markdown(f"• **{tax['name']}** ({label}): {format_amount(amount)}")

    split = summary.get("split", {})
    if not split:
        st.info("ℹ️ Add people to see how the bill is split.")
        return

    if summary.get("unassigned_amount", 0.0) > 0.005:
        st.warning(
            f"⚠️ {format_amount(summary['unassigned_amount'])} of the bill comes from dishes "
            "nobody is assigned to and is not charged to anyone."
        )

    st.markdown("### 💸 Who Pays What")
    grand_total = summary["grand_total"]
    for share in split.values():
        percentage = (share["amount"] / grand_total) * 100 if grand_total > 0 else 0
        st.markdown(f"""
        <div style="padding:15px; border:2px solid #28a745; border-radius:10px; margin:10px 0; background-color:#f8fff8;">
            <h3 style="margin:0; color:#28a745;">{share['name']}</h3>
            <h2 style="margin:5px 0; color:#28a745;">{format_amount(share['amount'])}</h2>
            <p style="margin:0; color:#666;">({percentage:.1f}% of total bill)</p>
        </div>
        """, unsafe_allow_html=True)

    split_df = pd.DataFrame(
        [{"Person": share["name"], "Amount": round(share["amount"], 2)} for share in split.values()]
    )
    with st.expander("📊 Table & chart"):
        st.dataframe(split_df, hide_index=True, use_container_width=True)
        if grand_total > 0:
            st.bar_chart(split_df.set_index("Person")["Amount"])

    summary_text = "\n".join(f"{share['name']}: {format_amount(share['amount'])}" for share in split.values())
    if st.button("📋 Copy Simple Summary"):
        st.code(f"{summary_text}\n\nTOTAL: {format_amount(grand_total)}")
