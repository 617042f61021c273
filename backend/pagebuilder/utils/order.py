def resequence(items, order_field="order"):
    """
    Re-assigns sequential order values (0..N-1) following list position.
    """
    for index, item in enumerate(items):
        setattr(item, order_field, index)

    return items


def sort_by_order(items, order_field="order"):
    """
    Stable sort on the order field, then resequence.
    """
    ordered = sorted(items, key=lambda item: getattr(item, order_field) or 0)
    return resequence(ordered, order_field)
