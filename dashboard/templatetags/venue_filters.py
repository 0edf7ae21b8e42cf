from decimal import InvalidOperation

from django import template

from events.payments import to_money

register = template.Library()


@register.filter
def brl(value):
    """
    Format an amount as Brazilian currency: 1500 -> "R$ 1.500,00".
    Negative amounts keep the sign in front of the symbol.
    """
    if value in (None, ""):
        return ""
    try:
        amount = to_money(value)
    except (InvalidOperation, TypeError, ValueError):
        return value

    sign = "-" if amount < 0 else ""
    whole, cents = f"{abs(amount):,.2f}".split(".")
    return f"{sign}R$ {whole.replace(',', '.')},{cents}"


@register.filter
def get_dict_value(dictionary, key):
    """Returns the value from the dictionary for the given key."""
    if dictionary and key in dictionary:
        return dictionary.get(key)
    return ''

