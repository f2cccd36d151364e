from __future__ import annotations

from src.checkin_desk.checkin_desk.attendees.matcher import (
    find_candidates,
    find_exact,
    mask_phone,
    phone_distance,
)
from src.checkin_desk.checkin_desk.attendees.model import AttendeeRecord
from src.checkin_desk.checkin_desk.core.enums import MatchType


def test_phone_distance_counts_positions():
    assert phone_distance("13800000001", "13800000002") == 1
    assert phone_distance("13800000001", "13800000001") == 0
    assert phone_distance("13800000001", "23800000002") == 2


def test_phone_distance_different_length_is_none():
    assert phone_distance("1380000001", "13800000001") is None


def test_one_digit_difference_is_candidate():
    records = [AttendeeRecord(name="李四", phone="13800000001")]

    result = find_candidates(records, "王五", "13800000002")

    assert result.exact is None
    assert len(result.candidates) == 1
    assert result.candidates[0].phone == "13800000001"
    assert result.candidates[0].match_type == MatchType.SIMILAR_PHONE


def test_different_length_phone_is_never_candidate():
    records = [AttendeeRecord(name="李四", phone="13800000001")]

    result = find_candidates(records, "王五", "1380000001")

    assert result.candidates == ()


def test_two_digit_difference_is_not_candidate():
    records = [AttendeeRecord(name="李四", phone="13800000011")]

    assert find_candidates(records, "王五", "13800000002").candidates == ()


def test_same_name_with_unrelated_phone_is_candidate():
    records = [AttendeeRecord(name="张三", phone="13911112222")]

    result = find_candidates(records, "张三", "13800000001")

    assert [c.match_type for c in result.candidates] == [MatchType.SAME_NAME]


def test_name_match_is_case_sensitive():
    records = [AttendeeRecord(name="Alice", phone="555")]

    assert find_candidates(records, "alice", "999").candidates == ()


def test_record_matching_both_rules_appears_once_as_same_name():
    records = [AttendeeRecord(name="A", phone="111")]

    result = find_candidates(records, "A", "112")

    assert len(result.candidates) == 1
    assert result.candidates[0].match_type == MatchType.SAME_NAME


def test_phone_candidates_come_before_name_candidates():
    records = [
        AttendeeRecord(name="A", phone="900"),
        AttendeeRecord(name="B", phone="112"),
    ]

    result = find_candidates(records, "A", "111")

    assert [c.phone for c in result.candidates] == ["112", "900"]


def test_duplicate_phones_keep_first_occurrence():
    records = [
        AttendeeRecord(name="A", phone="112"),
        AttendeeRecord(name="B", phone="112"),
    ]

    result = find_candidates(records, "B", "111")

    assert len(result.candidates) == 1
    assert result.candidates[0].name == "A"
    assert result.candidates[0].match_type == MatchType.SIMILAR_PHONE


def test_exact_match_returns_first_record():
    records = [
        AttendeeRecord(name="A", phone="111"),
        AttendeeRecord(name="B", phone="111"),
    ]

    assert find_exact(records, "111") == 0
    assert find_candidates(records, "X", "111").exact == records[0]


def test_exact_match_does_not_normalize_spacing():
    records = [AttendeeRecord(name="A", phone="138 0000 0001")]

    assert find_exact(records, "13800000001") is None


def test_mask_phone():
    assert mask_phone("13800000001") == "138****0001"
    assert mask_phone("123456789012") == "123*****9012"
    assert mask_phone("1234567") == "1234567"
    assert mask_phone("111") == "111"


def test_candidates_carry_masked_phone():
    records = [AttendeeRecord(name="李四", phone="13800000001")]

    result = find_candidates(records, "李四", "13900000009")

    assert result.candidates[0].masked_phone == "138****0001"
