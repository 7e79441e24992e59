"""검색 조건 → WHERE 절 변환 테스트.

Predicate composition tests — has_text semantics, one clause per present
field, blank strings and None treated as absent, ORDER BY tie-breaking.
"""

import pytest

from app.repositories.member_repository import (
    age_goe,
    age_loe,
    build_order_by,
    build_predicates,
    has_text,
    team_name_eq,
    username_eq,
)
from app.schemas.member import MemberSearchCondition
from app.utils.exceptions import BadRequestError
from app.utils.pagination import SortOrder


def sql(clause) -> str:
    """리터럴 바인딩으로 컴파일한 SQL 문자열."""
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


class TestHasText:
    """has_text 테스트."""

    @pytest.mark.parametrize("value", [None, "", " ", "\t\n", "   ", "\u3000", "\x1f"])
    def test_absent_values(self, value):
        """None, 빈 문자열, 공백 문자만 있으면 없음."""
        assert has_text(value) is False

    @pytest.mark.parametrize("value", ["a", " member1 ", "0", "\u00a0", " \u2007 ", "\u202f", "\x85"])
    def test_present_values(self, value):
        """줄바꿈 없는 공백은 텍스트로 취급."""
        assert has_text(value) is True


class TestPredicateFactories:
    """필드별 조건 팩토리 테스트."""

    def test_username_eq(self):
        assert sql(username_eq("member1")) == "member.username = 'member1'"

    def test_username_eq_blank_is_none(self):
        assert username_eq("  ") is None
        assert username_eq(None) is None

    def test_team_name_eq_uses_team_column(self):
        assert sql(team_name_eq("teamA")) == "team.name = 'teamA'"

    def test_team_name_eq_empty_is_none(self):
        assert team_name_eq("") is None

    def test_age_bounds(self):
        assert sql(age_goe(15)) == "member.age >= 15"
        assert sql(age_loe(35)) == "member.age <= 35"

    def test_age_zero_is_present(self):
        """0은 None이 아니므로 조건이 생성됨."""
        assert sql(age_goe(0)) == "member.age >= 0"

    def test_age_none_is_none(self):
        assert age_goe(None) is None
        assert age_loe(None) is None


class TestBuildPredicates:
    """조건 조합 테스트."""

    def test_empty_condition(self):
        assert build_predicates(MemberSearchCondition()) == []

    def test_none_condition(self):
        assert build_predicates(None) == []

    def test_whitespace_strings_omitted(self):
        condition = MemberSearchCondition(username=" ", team_name="\t")
        assert build_predicates(condition) == []

    def test_each_field_maps_to_one_clause(self):
        condition = MemberSearchCondition(
            username="member1", team_name="teamA", age_goe=10, age_loe=40
        )
        clauses = [sql(c) for c in build_predicates(condition)]
        assert clauses == [
            "member.username = 'member1'",
            "team.name = 'teamA'",
            "member.age >= 10",
            "member.age <= 40",
        ]

    def test_partial_condition(self):
        condition = MemberSearchCondition(team_name="teamB", age_loe=35)
        clauses = [sql(c) for c in build_predicates(condition)]
        assert clauses == ["team.name = 'teamB'", "member.age <= 35"]

    def test_condition_accepts_camel_case_keys(self):
        condition = MemberSearchCondition.model_validate({"teamName": "teamA", "ageGoe": 15})
        assert condition.team_name == "teamA"
        assert condition.age_goe == 15


class TestBuildOrderBy:
    """정렬 절 테스트."""

    def test_default_orders_by_id(self):
        assert [sql(c) for c in build_order_by(())] == ["member.id ASC"]

    def test_id_appended_as_tie_breaker(self):
        orders = [SortOrder(property="age", direction="desc")]
        assert [sql(c) for c in build_order_by(orders)] == ["member.age DESC", "member.id ASC"]

    def test_explicit_id_not_duplicated(self):
        orders = [SortOrder(property="id", direction="desc"), SortOrder(property="age")]
        assert [sql(c) for c in build_order_by(orders)] == ["member.id DESC", "member.age ASC"]

    def test_team_name_sort(self):
        orders = [SortOrder(property="teamName")]
        assert [sql(c) for c in build_order_by(orders)] == ["team.name ASC", "member.id ASC"]

    def test_unknown_property_rejected(self):
        with pytest.raises(BadRequestError) as exc_info:
            build_order_by([SortOrder(property="nickname")])
        assert exc_info.value.status_code == 400
