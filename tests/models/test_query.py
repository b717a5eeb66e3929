import pytest
from boto3.dynamodb.conditions import Attr
from pydantic import ValidationError

from models.query import ItemQuery, ItemStatus, build_filter, parse_status


class TestBuildFilter:
    """フィルタ条件の組み立てのテストクラス"""

    def test_name_and_status(self):
        condition = build_filter("foo", ItemStatus.ACTIVE)

        assert condition == Attr("name").eq("foo") & Attr("active").eq(True)

    def test_name_only(self):
        assert build_filter("foo", None) == Attr("name").eq("foo")

    def test_status_only(self):
        assert build_filter(None, ItemStatus.INACTIVE) == Attr("active").eq(False)

    def test_neither(self):
        """条件がない場合はフルスキャン (None) になること"""
        assert build_filter(None, None) is None

    def test_empty_name_is_absent(self):
        assert build_filter("", None) is None


class TestParseStatus:
    def test_active(self):
        assert parse_status("active") is ItemStatus.ACTIVE

    def test_inactive(self):
        assert parse_status("inactive") is ItemStatus.INACTIVE

    @pytest.mark.parametrize("raw", [None, "", "all", "both", "Active", "INACTIVE", " active"])
    def test_other_values_are_ignored(self, raw):
        """active/inactive 以外はフィルタなしとして扱われること"""
        assert parse_status(raw) is None


class TestItemQuery:
    def test_from_params(self):
        query = ItemQuery.from_params("T", "foo", "inactive")

        assert query.table_name == "T"
        assert query.name == "foo"
        assert query.status is ItemStatus.INACTIVE
        assert query.is_filtered

    def test_from_params_defaults(self):
        query = ItemQuery.from_params(None, "", "everything")

        assert query.table_name == ""
        assert query.name is None
        assert query.status is None
        assert not query.is_filtered
        assert query.build_filter() is None

    def test_query_is_immutable(self):
        """リクエストごとの検索条件は変更できないこと"""
        query = ItemQuery(table_name="T")

        with pytest.raises(ValidationError):
            query.table_name = "Other"
