"""
Household member parsing for the registration form.

The form posts member details as parallel fields.  A household with one
member sends each field once (a plain scalar); a household with several
sends each field repeatedly, or with a ``[]`` suffix, giving ordered lists.
Every field may also arrive as either ``name`` or ``name[]``.

``classify_members`` tags which of the three shapes a submission has and
``parse_members`` normalises all of them into one ordered list of member
dicts, so nothing downstream has to care which shape was posted:

    shape     memberName posted as        result
    ────────  ──────────────────────────  ───────────────────────────────
    none      absent / blank              []
    single    one non-blank scalar        one member from the scalars
    list      repeated or ``memberName[]``  N members, field i -> member i

For the list shape, ``memberName`` decides N.  Other fields that are shorter
leave the missing sub-fields empty; values beyond N are dropped.
"""
import logging

from utils.form_helpers import clean, parse_age

logger = logging.getLogger(__name__)

SHAPE_NONE = 'none'
SHAPE_SINGLE = 'single'
SHAPE_LIST = 'list'

NAME_FIELD = 'memberName'

# (member attribute, form names tried in order)
# Occupation and blood group share their form names with the head of family
# unless the form sends the member-specific names.
MEMBER_FIELDS = (
    ('relation', ('relation',)),
    ('age', ('age',)),
    ('marital_status', ('maritalStatus',)),
    ('blood_group', ('memberBloodGroup', 'bloodGroup')),
    ('qualification', ('qualification',)),
    ('occupation', ('memberOccupation', 'occupation')),
)


def _posted(form, name):
    """True if *name* or *name[]* appears in the submission at all."""
    return name in form or name + '[]' in form


def field_values(form, name):
    """Every value posted under *name* and *name[]*, in submission order."""
    return form.getlist(name) + form.getlist(name + '[]')


def is_sequence(form, name):
    """True when *name* arrived as a list rather than a single scalar."""
    return name + '[]' in form or len(form.getlist(name)) > 1


def _member_values(form, names):
    for name in names:
        if _posted(form, name):
            return field_values(form, name)
    return []


def classify_members(form):
    """Return the submission shape: SHAPE_NONE, SHAPE_SINGLE or SHAPE_LIST."""
    if is_sequence(form, NAME_FIELD):
        return SHAPE_LIST
    values = field_values(form, NAME_FIELD)
    if values and values[0] and values[0].strip():
        return SHAPE_SINGLE
    return SHAPE_NONE


def _build_member(name, raw):
    member = {'name': clean(name)}
    for attr, _names in MEMBER_FIELDS:
        value = raw.get(attr)
        member[attr] = parse_age(value) if attr == 'age' else clean(value)
    return member


def parse_members(form):
    """Normalise the member fields of *form* into an ordered list of dicts.

    *form* is a Werkzeug ``MultiDict`` (``request.form``).  Each dict has the
    keys ``name``, ``relation``, ``age``, ``marital_status``, ``blood_group``,
    ``qualification`` and ``occupation``; ``age`` is an int or ``None``.
    """
    shape = classify_members(form)

    if shape == SHAPE_NONE:
        return []

    if shape == SHAPE_SINGLE:
        raw = {}
        for attr, names in MEMBER_FIELDS:
            values = _member_values(form, names)
            raw[attr] = values[0] if values else None
        return [_build_member(field_values(form, NAME_FIELD)[0], raw)]

    names = field_values(form, NAME_FIELD)
    columns = {attr: _member_values(form, form_names) for attr, form_names in MEMBER_FIELDS}

    mismatched = sorted(
        attr for attr, values in columns.items()
        if values and len(values) != len(names)
    )
    if mismatched:
        logger.warning(
            f"member fields {', '.join(mismatched)} do not match {len(names)} member names; "
            "missing values left empty, extra values dropped"
        )

    members = []
    for i, name in enumerate(names):
        raw = {
            attr: values[i] if i < len(values) else None
            for attr, values in columns.items()
        }
        members.append(_build_member(name, raw))
    return members
