"""
Tests for household member parsing: the three submission shapes and the
parallel-list edge cases.
"""
from werkzeug.datastructures import MultiDict

from utils.member_fields import (
    SHAPE_LIST,
    SHAPE_NONE,
    SHAPE_SINGLE,
    classify_members,
    parse_members,
)


# ---------------------------------------------------------------------------
# Shape classification
# ---------------------------------------------------------------------------

class TestClassifyMembers:
    def test_no_member_fields(self):
        assert classify_members(MultiDict([('value', 'Shah Family')])) == SHAPE_NONE

    def test_blank_member_name_is_none(self):
        assert classify_members(MultiDict([('memberName', '   ')])) == SHAPE_NONE

    def test_single_scalar(self):
        assert classify_members(MultiDict([('memberName', 'Raj')])) == SHAPE_SINGLE

    def test_repeated_field_is_list(self):
        form = MultiDict([('memberName', 'Raj'), ('memberName', 'Sita')])
        assert classify_members(form) == SHAPE_LIST

    def test_bracket_suffix_is_list_even_with_one_value(self):
        assert classify_members(MultiDict([('memberName[]', 'Raj')])) == SHAPE_LIST


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParseMembers:
    def test_no_members(self):
        assert parse_members(MultiDict([('value', 'Shah Family')])) == []

    def test_single_member_from_scalars(self):
        form = MultiDict([
            ('memberName', 'Raj'),
            ('relation', 'son'),
            ('age', '20'),
            ('maritalStatus', 'single'),
            ('bloodGroup', 'B+'),
            ('qualification', 'B.Com'),
            ('occupation', 'Student'),
        ])

        members = parse_members(form)

        assert members == [{
            'name': 'Raj',
            'relation': 'son',
            'age': 20,
            'marital_status': 'single',
            'blood_group': 'B+',
            'qualification': 'B.Com',
            'occupation': 'Student',
        }]

    def test_parallel_lists_build_one_member_per_index(self):
        form = MultiDict([
            ('memberName', 'Raj'), ('memberName', 'Sita'),
            ('relation', 'son'), ('relation', 'daughter'),
            ('age', '20'), ('age', '18'),
            ('maritalStatus', 'single'), ('maritalStatus', 'married'),
            ('memberBloodGroup', 'B+'), ('memberBloodGroup', 'A-'),
            ('qualification', 'B.Com'), ('qualification', 'MBBS'),
            ('memberOccupation', 'Student'), ('memberOccupation', 'Doctor'),
        ])

        members = parse_members(form)

        assert [m['name'] for m in members] == ['Raj', 'Sita']
        assert [m['relation'] for m in members] == ['son', 'daughter']
        assert [m['age'] for m in members] == [20, 18]
        assert [m['marital_status'] for m in members] == ['single', 'married']
        assert [m['blood_group'] for m in members] == ['B+', 'A-']
        assert [m['qualification'] for m in members] == ['B.Com', 'MBBS']
        assert [m['occupation'] for m in members] == ['Student', 'Doctor']

    def test_bracketed_names_are_accepted(self):
        form = MultiDict([
            ('memberName[]', 'Raj'), ('memberName[]', 'Sita'),
            ('relation[]', 'son'), ('relation[]', 'daughter'),
        ])

        members = parse_members(form)

        assert [(m['name'], m['relation']) for m in members] == [('Raj', 'son'), ('Sita', 'daughter')]

    def test_shorter_field_leaves_sub_field_empty(self):
        form = MultiDict([
            ('memberName', 'Raj'), ('memberName', 'Sita'), ('memberName', 'Anil'),
            ('relation', 'son'), ('relation', 'daughter'),
        ])

        members = parse_members(form)

        assert len(members) == 3
        assert members[2]['name'] == 'Anil'
        assert members[2]['relation'] is None
        assert members[2]['age'] is None

    def test_longer_field_extra_values_dropped(self):
        form = MultiDict([
            ('memberName', 'Raj'), ('memberName', 'Sita'),
            ('age', '20'), ('age', '18'), ('age', '50'),
        ])

        members = parse_members(form)

        assert [m['age'] for m in members] == [20, 18]

    def test_shared_names_used_when_member_specific_absent(self):
        form = MultiDict([
            ('memberName', 'Raj'), ('memberName', 'Sita'),
            ('occupation', 'Student'), ('occupation', 'Doctor'),
        ])

        members = parse_members(form)

        assert [m['occupation'] for m in members] == ['Student', 'Doctor']

    def test_non_numeric_age_is_tolerated(self):
        form = MultiDict([('memberName', 'Raj'), ('age', 'twenty')])

        members = parse_members(form)

        assert len(members) == 1
        assert members[0]['age'] is None

    def test_order_is_preserved(self):
        names = ['Zara', 'Amit', 'Meera', 'Bhavesh']
        form = MultiDict([('memberName', n) for n in names])

        assert [m['name'] for m in parse_members(form)] == names
