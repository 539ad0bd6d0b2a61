"""Accepted header synonyms per logical field, already normalized.

Lookups walk each tuple in order, so earlier names win when a sheet carries
more than one of them.
"""
from __future__ import annotations

# Consolidated platform sheets.
CONSOLIDATED_DETECTION_ACCOUNT_COLUMNS = ("CLIENTE_CUENTA", "CLIENTE_CUENT")
CONSOLIDATED_ACCOUNT_COLUMNS = ("CLIENTE_CUENTA", "CLIENTE_CUENT", "CLIENTE")
ORIGIN_COLUMNS = ("ORIGEN",)
CONSOLIDATED_DEACTIVATION_COLUMNS = (
    "FECHA_DE_DESACTIVACION",
    "FECHA_DE_DE",
    "FECHA DE DESACTIVACION",
    "DESACTIVACION",
)
CONSOLIDATED_IMEI_COLUMNS = ("IMEI",)
CONSOLIDATED_DEVICE_TYPE_COLUMNS = ("TIPO_DE_DISPOSITIVO", "DEVICE_TYPE", "MODELO")

# Legacy platform sheets.
LEGACY_ACCOUNT_COLUMNS = ("CUENTA", "CLIENTE", "ACCOUNT", "CUSTOMER")
LEGACY_DEACTIVATION_COLUMNS = ("DESACTIVACIÓN", "DESACTIVACION", "FECHA DE BAJA", "BAJA", "DESACTIVADO")
LEGACY_STATUS_COLUMNS = ("STATUS", "ESTADO", "ESTATUS")
LEGACY_IMEI_COLUMNS = ("IMEI", "ID", "SERIAL")
LEGACY_DEVICE_TYPE_COLUMNS = ("TIPO", "MODELO")

DEVICE_NAME_COLUMNS = ("NOMBRE", "NAME", "UNIT", "UNIDAD")

# Cost workbook.
COST_SHEET_KEYWORDS = ("COSTOS", "SATECH")
COST_ACCOUNT_COLUMNS = ("CUENTA", "CLIENTE", "ACCOUNT")
UNIT_PRICE_COLUMNS = ("COSTO", "COSTO UNITARIO", "PRECIO", "IMPORTE", "MONTO", "VALOR", "COSTOS")
BILLING_TYPE_COLUMNS = ("TIPO", "PERIODICIDAD", "FRECUENCIA", "PLAN")
NOTES_COLUMNS = ("OBSERVACIONES", "NOTAS", "COMENTARIOS", "OBS")
COMMERCIAL_NAME_COLUMNS = ("NOMBRE COMERCIAL", "RAZON SOCIAL", "NOMBRE", "CLIENTE")

DEFAULT_DEVICE_NAME = "S/N"
PLACEHOLDER = "-"
DEFAULT_BILLING_TYPE = "N/A"
