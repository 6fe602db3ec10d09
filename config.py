"""
Configurazione centralizzata - modifica qui percorsi, chiavi e mapping.
"""

import os
from datetime import date

# Chiave unica sotto cui viene salvata tutta la lista dei record
STORAGE_KEY = "motorista_registo_diario_v3"

# File JSON locale (equivalente del localStorage del browser)
DATA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "registos.json")

# Data minima accettata dal campo DATA dei form
FORM_DATE_MIN = date(2000, 1, 1)

# Livello di log per i logger "motorista.*"
LOG_LEVEL = "INFO"

# Formattazione pt-PT: virgola decimale, spazio non separabile per le migliaia
CURRENCY_SYMBOL = "€"
DECIMAL_SEP = ","
THOUSANDS_SEP = "\u00a0"
EMPTY_PLACEHOLDER = "—"

# Mapping attributo Python → chiave nel blob salvato
STORAGE_FIELDS = {
    "id":                  "id",
    "date":                "date",
    "odometer_start":      "odometerStart",
    "odometer_end":        "odometerEnd",
    "distance_total":      "distanceTotal",
    "revenue_total":       "revenueTotal",
    "fuel_liters":         "fuelLiters",
    "fuel_cost":           "fuelCost",
    "transfer_count":      "transferCount",
    "card_payments_total": "cardPaymentsTotal",
    "notes":               "notes",
}

# Campi numerici (valore finito oppure vuoto)
NUMERIC_FIELDS = (
    "odometer_start",
    "odometer_end",
    "distance_total",
    "revenue_total",
    "fuel_liters",
    "fuel_cost",
    "transfer_count",
    "card_payments_total",
)

# Campi in euro (formattati con 2 decimali e simbolo)
EURO_FIELDS = ("revenue_total", "fuel_cost", "card_payments_total")

# Chiavi della vecchia app browser (export del localStorage) → attributo
LEGACY_FIELD_MAP = {
    "data":             "date",
    "kms_inicio":       "odometer_start",
    "kms_fim":          "odometer_end",
    "total_diario":     "revenue_total",
    "abastec_litros":   "fuel_liters",
    "abastec_euros":    "fuel_cost",
    "transfers":        "transfer_count",
    "multibanco_euros": "card_payments_total",
    "observacoes":      "notes",
}

# Etichette colonne per tabella e form (ordine di visualizzazione)
FIELD_LABELS = {
    "date":                "DATA",
    "odometer_start":      "KMS INÍCIO",
    "odometer_end":        "KMS FIM",
    "distance":            "KMS TOTAL",
    "revenue_total":       "TOTAL DIÁRIO (€)",
    "fuel_liters":         "ABAST. (L)",
    "fuel_cost":           "ABAST. (€)",
    "transfer_count":      "TRANSFERS",
    "card_payments_total": "MULTIBANCO (€)",
    "notes":               "OBSERVAÇÕES",
}
