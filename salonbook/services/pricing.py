"""Design add-on pricing rules.

Pure functions: nothing here touches the database. The booking flow persists
the returned quote as part of the appointment's price snapshot.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

from salonbook.core.errors import ConfigurationError, ValidationError
from salonbook.models.service import DesignMode, Service
from salonbook.schemas.base import MAX_CENTS

DESIGN_NOTES_MAX_LENGTH = 200


@dataclass(frozen=True)
class DesignQuote:
    has_design: bool
    design_price_cents: int | None = None
    design_notes: str | None = None


NO_DESIGN = DesignQuote(has_design=False)


def appointment_total_cents(price_cents: int | None, design_price_cents: int | None) -> int:
    """Base price plus design add-on (0 when there is none)."""
    return (price_cents or 0) + (design_price_cents or 0)


def major_to_minor_units(amount: float | int | str) -> int:
    """Dollars -> cents, rounding half away from zero."""
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValidationError("Design price must be a number.", field="designPrice")
    if not value.is_finite():
        raise ValidationError("Design price must be a number.", field="designPrice")

    try:
        cents = int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValidationError("Design price is too large.", field="designPrice")
    if abs(cents) > MAX_CENTS:
        raise ValidationError("Design price is too large.", field="designPrice")
    return cents


def sanitize_design_notes(notes: str | None) -> str | None:
    if not isinstance(notes, str):
        return None
    notes = notes.strip()
    if not notes:
        return None
    return notes[:DESIGN_NOTES_MAX_LENGTH]


def validate_design_config(mode: DesignMode, design_price_cents: int | None) -> None:
    """Enforce: design_price_cents is set and > 0 exactly when mode is FIXED."""
    if mode == DesignMode.FIXED:
        if design_price_cents is None or design_price_cents <= 0:
            raise ValidationError(
                "designPriceCents is required and must be > 0 when designMode is 'fixed'.",
                field="designPriceCents",
            )
    elif design_price_cents is not None:
        raise ValidationError(
            "designPriceCents must be null unless designMode is 'fixed'.",
            field="designPriceCents",
        )


def resolve_design(
    service: Service,
    wants_design: bool,
    design_price: float | None = None,
    preset_id: int | None = None,
    design_notes: str | None = None,
) -> DesignQuote:
    """Decide whether the add-on is allowed for ``service`` and price it.

    ``design_price`` is in major units (dollars) and only used for CUSTOM
    services when no preset is chosen. FIXED services always charge their
    configured price, whatever the client sent.
    """
    if not wants_design:
        return NO_DESIGN

    mode = DesignMode(service.design_mode)

    if mode == DesignMode.NONE:
        raise ValidationError("Design is not available for this service.", field="addDesign")

    if mode == DesignMode.FIXED:
        if service.design_price_cents is None or service.design_price_cents <= 0:
            raise ConfigurationError("Design price is not configured for this service.")
        price_cents = service.design_price_cents

    else:
        if preset_id is not None:
            option = next((o for o in service.design_price_options if o.id == preset_id), None)
            if option is None:
                raise ValidationError("Unknown design price preset for this service.", field="designPresetId")
            price_cents = option.price_cents
        elif design_price is not None and design_price > 0:
            price_cents = major_to_minor_units(design_price)
        else:
            price_cents = 0

        if price_cents <= 0:
            raise ValidationError("Design price is required and must be > 0.", field="designPrice")

    return DesignQuote(
        has_design=True,
        design_price_cents=price_cents,
        design_notes=sanitize_design_notes(design_notes),
    )
