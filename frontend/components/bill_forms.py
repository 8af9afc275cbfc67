import streamlit as st
from typing import Any, Dict, List, Tuple

from billsplit.services.form_input import clean_name, parse_amount

TAX_KINDS = ["percentage", "fixed"]
TAX_KIND_LABELS = {"percentage": "Percentage (%)", "fixed": "Fixed (€)"}


def apply_response(result: Tuple[bool, Dict[str, Any]]) -> None:
    """Keep the latest bill returned by the API, or remember the error to show it"""
    success, response = result
    if success and response.get("success"):
        st.session_state.bill_data = response
        st.session_state.last_error = None
    else:
        st.session_state.last_error = response.get("error", "Unknown error")


# --- Callbacks ---

def _add_person(api_client) -> None:
    name = clean_name(st.session_state.person_name_input)
    if name:
        apply_response(api_client.add_person(name))
        st.session_state.person_name_input = ""


def _rename_person(api_client, person_id: str) -> None:
    name = clean_name(st.session_state[f"person_name_{person_id}"])
    if name:
        apply_response(api_client.rename_person(person_id, name))


def _add_dish(api_client) -> None:
    name = clean_name(st.session_state.dish_name_input)
    price = parse_amount(st.session_state.dish_price_input)
    if name and price is not None:
        apply_response(api_client.add_dish(name, st.session_state.dish_price_input))
        st.session_state.dish_name_input = ""
        st.session_state.dish_price_input = ""
    elif name:
        st.session_state.last_error = "Please enter a valid price (0 or more)."


def _edit_dish_name(api_client, dish_id: str) -> None:
    name = clean_name(st.session_state[f"dish_name_{dish_id}"])
    if name:
        apply_response(api_client.edit_dish(dish_id, name=name))


def _edit_dish_price(api_client, dish_id: str) -> None:
    apply_response(api_client.edit_dish(dish_id, price=st.session_state[f"dish_price_{dish_id}"]))


def _add_tax(api_client) -> None:
    name = clean_name(st.session_state.tax_name_input)
    value = parse_amount(st.session_state.tax_value_input)
    if name and value is not None:
        apply_response(api_client.add_tax(name, st.session_state.tax_kind_input, st.session_state.tax_value_input))
        st.session_state.tax_name_input = ""
        st.session_state.tax_value_input = ""
        st.session_state.tax_kind_input = "percentage"
    elif name:
        st.session_state.last_error = "Please enter a valid tax value (0 or more)."


def _edit_tax(api_client, tax_id: str, field: str) -> None:
    value = st.session_state[f"tax_{field}_{tax_id}"]
    if field == "name":
        value = clean_name(value)
        if not value:
            return
    apply_response(api_client.edit_tax(tax_id, **{field: value}))


# --- Sections ---

def render_people_section(api_client, people: List[Dict[str, Any]]) -> None:
    st.subheader("👥 People")

    col1, col2 = st.columns([3, 1])
    with col1:
        st.text_input(
            "Person name",
            key="person_name_input",
            placeholder="Person name",
            label_visibility="collapsed",
            on_change=_add_person,
            args=(api_client,)
        )
    with col2:
        st.button("Add Person", on_click=_add_person, args=(api_client,))

    if not people:
        st.caption("No people added yet.")

    for person in people:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.text_input(
                "Name",
                value=person["name"],
                key=f"person_name_{person['id']}",
                label_visibility="collapsed",
                on_change=_rename_person,
                args=(api_client, person["id"])
            )
        with col2:
            st.button(
                "Delete",
                key=f"delete_person_{person['id']}",
                on_click=lambda pid=person["id"]: apply_response(api_client.delete_person(pid))
            )


def render_dishes_section(api_client, dishes: List[Dict[str, Any]], people: List[Dict[str, Any]]) -> None:
    st.subheader("🍽️ Dishes")

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        st.text_input("Dish name", key="dish_name_input", placeholder="Dish name", label_visibility="collapsed")
    with col2:
        st.text_input(
            "Price",
            key="dish_price_input",
            placeholder="Price (€)",
            label_visibility="collapsed",
            on_change=_add_dish,
            args=(api_client,)
        )
    with col3:
        st.button("Add Dish", on_click=_add_dish, args=(api_client,))

    if not dishes:
        st.caption("No dishes added yet.")

    for dish in dishes:
        with st.container(border=True):
            col1, col2, col3 = st.columns([3, 2, 1])
            with col1:
                st.text_input(
                    "Dish",
                    value=dish["name"],
                    key=f"dish_name_{dish['id']}",
                    label_visibility="collapsed",
                    on_change=_edit_dish_name,
                    args=(api_client, dish["id"])
                )
            with col2:
                st.text_input(
                    "Price",
                    # Empty when 0 so the field can be typed over
                    value=f"{dish['price']:g}" if dish["price"] > 0 else "",
                    key=f"dish_price_{dish['id']}",
                    placeholder="Price (€)",
                    label_visibility="collapsed",
                    on_change=_edit_dish_price,
                    args=(api_client, dish["id"])
                )
            with col3:
                st.button(
                    "Delete",
                    key=f"delete_dish_{dish['id']}",
                    on_click=lambda did=dish["id"]: apply_response(api_client.delete_dish(did))
                )

            if people:
                st.caption("Shared by:")
                cols = st.columns(min(len(people), 4))
                for i, person in enumerate(people):
                    with cols[i % len(cols)]:
                        st.checkbox(
                            person["name"],
                            value=person["id"] in dish["shared_by"],
                            key=f"share_{dish['id']}_{person['id']}",
                            on_change=lambda did=dish["id"], pid=person["id"]: apply_response(
                                api_client.toggle_dish_person(did, pid)
                            )
                        )
            else:
                st.caption("Add people to assign this dish.")


def render_taxes_section(api_client, taxes: List[Dict[str, Any]]) -> None:
    st.subheader("🧾 Taxes & Surcharges")

    col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
    with col1:
        st.text_input("Tax name", key="tax_name_input", placeholder="Tax name", label_visibility="collapsed")
    with col2:
        if "tax_kind_input" not in st.session_state:
            st.session_state.tax_kind_input = "percentage"
        st.selectbox(
            "Kind",
            TAX_KINDS,
            key="tax_kind_input",
            format_func=TAX_KIND_LABELS.get,
            label_visibility="collapsed"
        )
    with col3:
        st.text_input(
            "Value",
            key="tax_value_input",
            placeholder="Value",
            label_visibility="collapsed",
            on_change=_add_tax,
            args=(api_client,)
        )
    with col4:
        st.button("Add Tax", on_click=_add_tax, args=(api_client,))

    if not taxes:
        st.caption("No taxes added yet.")

    for tax in taxes:
        col1, col2, col3, col4 = st.columns([3, 2, 2, 1])
        with col1:
            st.text_input(
                "Tax",
                value=tax["name"],
                key=f"tax_name_{tax['id']}",
                label_visibility="collapsed",
                on_change=_edit_tax,
                args=(api_client, tax["id"], "name")
            )
        with col2:
            st.selectbox(
                "Kind",
                TAX_KINDS,
                index=TAX_KINDS.index(tax["kind"]),
                key=f"tax_kind_{tax['id']}",
                format_func=TAX_KIND_LABELS.get,
                label_visibility="collapsed",
                on_change=_edit_tax,
                args=(api_client, tax["id"], "kind")
            )
        with col3:
            st.text_input(
                "Value",
                value=f"{tax['value']:g}",
                key=f"tax_value_{tax['id']}",
                label_visibility="collapsed",
                on_change=_edit_tax,
                args=(api_client, tax["id"], "value")
            )
        with col4:
            st.button(
                "Delete",
                key=f"delete_tax_{tax['id']}",
                on_click=lambda tid=tax["id"]: apply_response(api_client.delete_tax(tid))
            )
