from decimal import Decimal, ROUND_HALF_UP


def precio_con_descuento(precio, descuento) -> Decimal:
    """Precio aplicado el porcentaje de descuento, redondeado a centavos."""
    precio = Decimal(precio or 0)
    descuento = Decimal(descuento or 0)
    final = precio * (Decimal("100") - descuento) / Decimal("100")
    return final.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
