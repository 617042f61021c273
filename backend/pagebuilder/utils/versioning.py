from .order import sort_by_order


def snapshot_sections(sections):
    """
    Deep, independent copy of an ordered section list.

    Nothing in the snapshot aliases the live model, so later in-place
    edits of config/style never leak into history.
    """
    return [section.copy() for section in sections]


def restore_sections(snapshot):
    """
    Fresh working copy of a snapshot, sorted and resequenced by order.
    """
    return sort_by_order(snapshot_sections(snapshot))

