"""
Motorista - Registo diário
Web app Streamlit: tudo manual, tudo fica guardado.
Storage: file JSON locale oppure Google Sheets (se configurato nei secrets).
"""

import logging

import streamlit as st

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import DATA_PATH, EURO_FIELDS, FORM_DATE_MIN, LOG_LEVEL, STORAGE_KEY
from core.journal import DailyLog
from core.models import FilterCriteria
from core.normalizer import empty_draft, normalize_record
from core.form import date_input_bounds, record_to_draft, reset_table_selection, table_key, to_form_date
from core.numbers import format_euro_for_input, strip_euro_suffix
from core.sheets import SheetsStore, sheets_configured
from core.storage import JsonFileStore
from reports.table import build_records_df

logger = logging.getLogger("motorista.ui")
if not logger.handlers:
    logging.basicConfig(level=LOG_LEVEL, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")

st.set_page_config(
    page_title="Motorista - Registo diário",
    page_icon="🚕",
    layout="wide",
)

st.title("🚕 Motorista — Registo diário")
st.caption("Tudo manual, tudo fica guardado.")

# (campo, etichetta, placeholder) nell'ordine del form
FORM_FIELDS = [
    ("odometer_start",      "KMS INÍCIO",               "ex.: 152340"),
    ("odometer_end",        "KMS FIM",                  "ex.: 152410"),
    ("distance_total",      "KMS TOTAL (opcional)",     "vazio = fim − início"),
    ("revenue_total",       "TOTAL DIÁRIO (EUROS)",     "ex.: 120,50"),
    ("fuel_liters",         "ABASTECIMENTO (LITROS)",   "ex.: 18"),
    ("fuel_cost",           "ABASTECIMENTO (EUROS)",    "ex.: 32,40"),
    ("transfer_count",      "TRANSFERS",                "ex.: 6"),
    ("card_payments_total", "MULTIBANCO (EUROS)",       "ex.: 85,00"),
    ("notes",               "OBSERVAÇÕES",              "ex.: aeroporto / hotel / portagens…"),
]


# ── Store ────────────────────────────────────────────────────────────────────
@st.cache_resource
def get_store():
    if sheets_configured():
        logger.info("Uso Google Sheets, foglio %s", STORAGE_KEY)
        return SheetsStore()
    logger.info("Uso file locale %s", DATA_PATH)
    return JsonFileStore(DATA_PATH)


def get_log() -> DailyLog:
    return DailyLog(get_store())


with st.sidebar:
    st.header("Armazenamento")
    if sheets_configured():
        st.success("✓ Google Sheets ligado")
    else:
        st.info("💾 Ficheiro local")
        st.caption(f"`{DATA_PATH}`")
    st.divider()
    st.caption("Não há somas automáticas. A app só guarda e lista os registos.")


# ── Draft helpers ────────────────────────────────────────────────────────────
def _key(prefix: str, field: str) -> str:
    return f"{prefix}_{field}"


def _load_draft(prefix: str, values: dict) -> None:
    """Copia i valori nel session_state dei widget del form."""
    st.session_state[_key(prefix, "date")] = to_form_date(values.get("date"))
    for field, _, _ in FORM_FIELDS:
        st.session_state[_key(prefix, field)] = values.get(field, "")


def _format_euro_field(key: str) -> None:
    """All'uscita dal campo: '120,5' → '120,50 €'."""
    st.session_state[key] = format_euro_for_input(strip_euro_suffix(st.session_state.get(key)))


def _save_draft(prefix: str, record_id: str = "") -> None:
    raw = {field: st.session_state.get(_key(prefix, field)) for field, _, _ in FORM_FIELDS}
    raw["date"] = st.session_state.get(_key(prefix, "date"))
    raw["id"] = record_id
    record = normalize_record(raw)
    try:
        get_log().upsert(record)
    except Exception as e:
        logger.exception("Salvataggio fallito")
        st.session_state["flash_error"] = f"Erro ao guardar: {e}"
        return
    st.session_state["flash_ok"] = f"✓ Registo de {record.date} guardado."
    reset_table_selection(st.session_state)
    if prefix == "novo":
        _load_draft("novo", empty_draft())
    else:
        st.session_state.pop("editing_id", None)


def _delete(record_id: str) -> None:
    try:
        get_log().delete(record_id)
    except Exception as e:
        logger.exception("Cancellazione fallita")
        st.session_state["flash_error"] = f"Erro ao apagar: {e}"
    st.session_state.pop("confirm_del_id", None)
    reset_table_selection(st.session_state)


def _clear_filters() -> None:
    st.session_state["f_q"] = ""
    st.session_state["f_from"] = None
    st.session_state["f_to"] = None
    reset_table_selection(st.session_state)


def render_form(prefix: str) -> None:
    """Campi del form (nuovo o modifica). I campi € si formattano all'uscita."""
    c1, c2, c3 = st.columns(3)
    with c1:
        date_key = _key(prefix, "date")
        min_value, max_value = date_input_bounds(to_form_date(st.session_state.get(date_key)))
        st.date_input("DATA", key=date_key, format="YYYY-MM-DD",
                      min_value=min_value, max_value=max_value)
    cols = [c2, c3] + list(st.columns(3)) + list(st.columns(3)) + list(st.columns(1))
    for (field, label, placeholder), col in zip(FORM_FIELDS, cols):
        key = _key(prefix, field)
        with col:
            if field in EURO_FIELDS:
                st.text_input(label, key=key, placeholder=placeholder,
                              on_change=_format_euro_field, args=(key,))
            else:
                st.text_input(label, key=key, placeholder=placeholder)


# ── Stato iniziale ───────────────────────────────────────────────────────────
if _key("novo", "date") not in st.session_state:
    _load_draft("novo", empty_draft())
st.session_state.setdefault("f_q", "")
st.session_state.setdefault("f_from", None)
st.session_state.setdefault("f_to", None)

try:
    log = get_log()
except Exception as e:
    st.error(f"Erro ao carregar os registos: {e}")
    st.exception(e)
    st.stop()

for flash, show in (("flash_ok", st.success), ("flash_error", st.error)):
    if flash in st.session_state:
        show(st.session_state.pop(flash))


# ============================================================
# NOVO REGISTO + FILTROS
# ============================================================
with st.container(border=True):
    st.subheader("Novo registo")
    render_form("novo")
    st.button("Guardar", type="primary", on_click=_save_draft, args=("novo",))

with st.container(border=True):
    st.subheader("Filtros")
    f1, f2, f3, f4 = st.columns([3, 2, 2, 1])
    with f1:
        st.text_input("Pesquisar (observações)", key="f_q", placeholder="ex.: aeroporto, hotel…",
                      on_change=reset_table_selection, args=(st.session_state,))
    with f2:
        st.date_input("De", key="f_from", format="YYYY-MM-DD", min_value=FORM_DATE_MIN,
                      on_change=reset_table_selection, args=(st.session_state,))
    with f3:
        st.date_input("Até", key="f_to", format="YYYY-MM-DD", min_value=FORM_DATE_MIN,
                      on_change=reset_table_selection, args=(st.session_state,))
    with f4:
        st.button("Limpar", on_click=_clear_filters)

criteria = FilterCriteria(
    query=st.session_state.get("f_q") or "",
    date_from=st.session_state["f_from"].isoformat() if st.session_state.get("f_from") else "",
    date_to=st.session_state["f_to"].isoformat() if st.session_state.get("f_to") else "",
)


# ============================================================
# LISTA REGISTOS
# ============================================================
st.divider()
visible = log.visible(criteria)
st.subheader(f"Registos ({len(visible)} de {len(log)})")

if not visible:
    st.info("Sem registos.")
else:
    event = st.dataframe(
        build_records_df(visible),
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key=table_key(st.session_state),
    )
    selected_rows = event.selection.rows if event else []
    if selected_rows and selected_rows[0] < len(visible):
        selected = visible[selected_rows[0]]
        st.caption(f"Selecionado: **{selected.date}** — {selected.notes or '—'}")
        a1, a2, _ = st.columns([1, 1, 6])
        with a1:
            if st.button("Editar"):
                st.session_state["editing_id"] = selected.id
                st.session_state.pop("confirm_del_id", None)
                _load_draft("edit", record_to_draft(selected))
        with a2:
            if st.button("Apagar", type="secondary"):
                st.session_state["confirm_del_id"] = selected.id
                st.session_state.pop("editing_id", None)


# ── Modifica ─────────────────────────────────────────────────────────────────
editing = log.get(st.session_state.get("editing_id", ""))
if editing is not None:
    with st.container(border=True):
        st.subheader(f"Editar {editing.date}")
        render_form("edit")
        b1, b2, _ = st.columns([1, 2, 5])
        with b1:
            if st.button("Cancelar", key="edit_cancel"):
                st.session_state.pop("editing_id", None)
                st.rerun()
        with b2:
            st.button("Guardar alterações", type="primary",
                      on_click=_save_draft, args=("edit", editing.id))


# ── Conferma cancellazione ───────────────────────────────────────────────────
to_delete = log.get(st.session_state.get("confirm_del_id", ""))
if to_delete is not None:
    with st.container(border=True):
        st.subheader("Confirmar apagamento")
        st.write(f"Apagar o registo de **{to_delete.date}**? (não dá para desfazer)")
        d1, d2, _ = st.columns([1, 1, 6])
        with d1:
            if st.button("Cancelar", key="del_cancel"):
                st.session_state.pop("confirm_del_id", None)
                st.rerun()
        with d2:
            st.button("Apagar", key="del_confirm", type="primary",
                      on_click=_delete, args=(to_delete.id,))
