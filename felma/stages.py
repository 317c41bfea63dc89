# Felma Workflow Stages
# Linear progression an item moves through once it has been captured

STAGES = [
    'capture',
    'clarify',
    'involve',
    'choose',
    'prepare',
    'act',
    'learn',
    'recognise',
    'share',
]

FIRST_STAGE = STAGES[0]
LAST_STAGE = STAGES[-1]


class StageError(ValueError):
    """Unknown stage name or a move that is not forwards."""


def note_field(stage):
    """Column holding the note for a stage (e.g. 'clarify' -> 'clarify_note')"""
    return f'{stage}_note'


NOTE_FIELDS = [note_field(stage) for stage in STAGES]


def stage_index(stage):
    try:
        return STAGES.index(stage)
    except ValueError:
        raise StageError(f"Unknown stage '{stage}'") from None


def next_stage(current):
    """Stage after `current`, or None when the item is already at the end."""
    index = stage_index(current)
    if index + 1 < len(STAGES):
        return STAGES[index + 1]
    return None


def advance_stage(current, target=None):
    """Validate a move and return the stage the item ends up in.

    Args:
        current: The item's stage now (None is treated as 'capture')
        target: Stage to jump to; defaults to the next one

    Raises:
        StageError if target is unknown, not later than current, or
        the item is already at the last stage
    """
    current = current or FIRST_STAGE
    current_index = stage_index(current)

    if target is None:
        target = next_stage(current)
        if target is None:
            raise StageError(f"Item is already at the final stage '{LAST_STAGE}'")
        return target

    if stage_index(target) <= current_index:
        raise StageError(f"Cannot move from '{current}' back or sideways to '{target}'")
    return target


def stage_changes(current, target=None, note=None):
    """Fields to write when advancing: the new stage plus the note for the stage being left."""
    current = current or FIRST_STAGE
    new_stage = advance_stage(current, target)
    changes = {'stage': new_stage}
    if note is not None:
        changes[note_field(current)] = note
    return changes
