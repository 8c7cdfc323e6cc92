from typing import Any, Dict, List, Mapping, Sequence, Tuple
from foodhub.core.exceptions import NotFoundError
from foodhub.schemas.order import CreateOrderItemInput, OrderItemOptionInput
from foodhub.schemas.restaurant import DishOption


def dish_price(dish: Any, requested_options: Sequence[OrderItemOptionInput]) -> float:
    """
    Base price of `dish` plus the extras of the options the customer picked.

    Options the dish does not define are ignored. A flat `extra` on an
    option wins over its choices; choices are only priced when the option
    has no flat extra.
    """
    price = dish.price
    defined = [DishOption.model_validate(o) for o in dish.options or []]

    for requested in requested_options:
        option = next((o for o in defined if o.name == requested.name), None)
        if option is None:
            continue

        if option.extra:
            price += option.extra
            continue

        choice = next((c for c in option.choices or [] if c.name == requested.choice), None)
        if choice and choice.extra:
            price += choice.extra

    return price


def price_order(
    menu: Mapping[int, Any],
    items: Sequence[CreateOrderItemInput],
) -> Tuple[float, List[Tuple[Any, List[Dict[str, Any]]]]]:
    """
    Prices a whole order against a restaurant's menu (dish id -> dish).

    Returns the order total and one (dish, raw options) pair per selection.
    Raises NotFoundError if any dish is missing from the menu, before
    anything is written.
    """
    total = 0.0
    resolved = []

    for item in items:
        dish = menu.get(item.dish_id)
        if dish is None:
            raise NotFoundError(f"Dish {item.dish_id} not found.")

        total += dish_price(dish, item.options)
        resolved.append((dish, [o.model_dump() for o in item.options]))

    return total, resolved
