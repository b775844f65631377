"""Tests for the linked discount / final price controller."""

from __future__ import annotations

from decimal import Decimal

import pytest

from pos_pricing.services.pricing import (
    EditState,
    PricingSnapshot,
    ReconciliationController,
)


def test_discount_percent_derives_final_price() -> None:
    controller = ReconciliationController(Decimal("25.00"))

    assert controller.set_discount_percent(Decimal("10")) is True
    assert controller.final_price == Decimal("22.50")
    assert controller.discount_percent == Decimal("10")
    assert controller.suggested_total - controller.final_price == Decimal("2.50")


def test_final_price_derives_discount_percent() -> None:
    controller = ReconciliationController(Decimal("25.00"))

    controller.set_final_price(Decimal("20"))

    assert controller.final_price == Decimal("20.00")
    assert controller.discount_percent == Decimal("20.0")


def test_discount_percent_rounds_to_one_decimal() -> None:
    controller = ReconciliationController(Decimal("30.00"))

    controller.set_final_price(Decimal("20.00"))

    assert controller.discount_percent == Decimal("33.3")


def test_sub_cent_final_price_is_not_rounded_before_derivation() -> None:
    controller = ReconciliationController(Decimal("1.00"))

    controller.set_final_price(Decimal("0.995"))

    assert controller.final_price == Decimal("0.995")
    assert controller.discount_percent == Decimal("0.5")


def test_final_price_above_suggested_forces_zero_discount() -> None:
    controller = ReconciliationController(Decimal("25.00"))
    controller.set_discount_percent(Decimal("15"))

    controller.set_final_price(Decimal("30"))

    assert controller.final_price == Decimal("30.00")
    assert controller.discount_percent == Decimal("0")


def test_empty_cart_never_divides_by_zero() -> None:
    controller = ReconciliationController()

    controller.set_discount_percent(Decimal("50"))
    assert controller.final_price == Decimal("0.00")
    assert controller.discount_percent == Decimal("0")

    controller.set_final_price(Decimal("12"))
    assert controller.final_price == Decimal("12.00")
    assert controller.discount_percent == Decimal("0")


def test_invalid_values_are_treated_as_zero() -> None:
    controller = ReconciliationController(Decimal("25.00"))

    controller.set_discount_percent("not a number")
    assert controller.final_price == Decimal("25.00")

    controller.set_final_price(Decimal("-4"))
    assert controller.final_price == Decimal("0.00")
    assert controller.discount_percent == Decimal("100.0")


def test_discount_above_hundred_is_capped() -> None:
    controller = ReconciliationController(Decimal("25.00"))

    controller.set_discount_percent(Decimal("250"))

    assert controller.discount_percent == Decimal("100")
    assert controller.final_price == Decimal("0.00")


def test_cart_change_resets_user_input() -> None:
    controller = ReconciliationController(Decimal("25.00"))
    controller.set_discount_percent(Decimal("10"))

    controller.on_cart_or_mode_changed(Decimal("40.00"))

    assert controller.snapshot() == PricingSnapshot(
        suggested_total=Decimal("40.00"),
        final_price=Decimal("40.00"),
        discount_percent=Decimal("0"),
    )


def test_listener_write_back_from_other_field_is_rejected() -> None:
    controller = ReconciliationController(Decimal("25.00"))
    outcomes: list[bool] = []
    states: list[EditState] = []

    def echo(snapshot: PricingSnapshot) -> None:
        states.append(controller.state)
        if controller.updating_from_discount:
            outcomes.append(controller.set_final_price(snapshot.final_price))

    controller.subscribe(echo)
    controller.set_discount_percent(Decimal("10"))

    assert outcomes == [False]
    assert states == [EditState.EDITING_DISCOUNT]
    assert controller.state is EditState.IDLE
    assert controller.discount_percent == Decimal("10")
    assert controller.final_price == Decimal("22.50")


def test_price_edit_blocks_discount_write_back() -> None:
    controller = ReconciliationController(Decimal("25.00"))
    outcomes: list[bool] = []

    def echo(snapshot: PricingSnapshot) -> None:
        if controller.updating_from_price:
            outcomes.append(controller.set_discount_percent(snapshot.discount_percent))

    controller.subscribe(echo)
    controller.set_final_price(Decimal("20"))

    assert outcomes == [False]
    assert controller.final_price == Decimal("20.00")
    assert controller.discount_percent == Decimal("20.0")


def test_state_returns_to_idle_when_listener_raises() -> None:
    controller = ReconciliationController(Decimal("25.00"))

    def broken(_: PricingSnapshot) -> None:
        raise RuntimeError("listener failed")

    unsubscribe = controller.subscribe(broken)
    with pytest.raises(RuntimeError):
        controller.set_final_price(Decimal("10"))

    assert controller.state is EditState.IDLE
    unsubscribe()
    assert controller.set_discount_percent(Decimal("20")) is True
    assert controller.final_price == Decimal("20.00")


def test_unsubscribe_stops_notifications() -> None:
    controller = ReconciliationController(Decimal("10.00"))
    seen: list[Decimal] = []

    unsubscribe = controller.subscribe(lambda snapshot: seen.append(snapshot.final_price))
    controller.set_discount_percent(Decimal("50"))
    unsubscribe()
    controller.set_discount_percent(Decimal("20"))

    assert seen == [Decimal("5.00")]
