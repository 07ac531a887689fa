"""Unit tests for report rendering and writing."""

import os
import stat

import pytest
from services.topup_service.exceptions import ReportWriteError
from services.topup_service.services.indexing import (
    get_company_id_to_user_uuids,
    index_by_id,
    index_by_uuid,
)
from services.topup_service.services.reporting import (
    generate_report,
    get_company_report,
    render_report,
    sorted_company_ids,
    write_report,
)
from services.topup_service.services.topup_ops import batch_top_up
from services.topup_service.services.validation import get_companies, get_users
from tests.factories import CompanyFactory, UserFactory

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _render(raw_companies, raw_users):
    companies = get_companies(raw_companies)
    users = get_users(raw_users)
    user_uuid_to_user = index_by_uuid(users)
    changes = batch_top_up(
        companies, get_company_id_to_user_uuids(users), user_uuid_to_user
    )
    return render_report(changes, index_by_id(companies), user_uuid_to_user)


def _company_ids_in(report: str) -> list[str]:
    prefix = "\tCompany Id: "
    return [line[len(prefix):] for line in report.splitlines() if line.startswith(prefix)]


def _names_in_section(report: str, section: str) -> list[str]:
    lines = report.splitlines()
    start = lines.index(f"\t{section}:") + 1
    names = []
    for line in lines[start:]:
        if not line.startswith("\t\t") or line.startswith("\t\tTotal"):
            break
        if not line.startswith("\t\t  "):
            names.append(line.strip().split(",")[0])
    return names


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_single_emailed_user_layout():
    report = _render(
        [CompanyFactory.create(id=1, name="Acme", top_up=50, email_status=True)],
        [
            UserFactory.create(
                first_name="Ada",
                last_name="Lovelace",
                email="ada@test.com",
                company_id=1,
                tokens=100,
                email_status=True,
            )
        ],
    )

    assert report == (
        "\n"
        "\tCompany Id: 1\n"
        "\tCompany Name: Acme\n"
        "\tUsers Emailed:\n"
        "\t\tLovelace, Ada, ada@test.com\n"
        "\t\t  Previous Token Balance, 100\n"
        "\t\t  New Token Balance 150\n"
        "\tUsers Not Emailed:\n"
        "\t\tTotal amount of top ups for Acme: 50\n"
        "\n"
    )


@pytest.mark.unit
def test_opted_out_user_listed_under_not_emailed():
    report = _render(
        [CompanyFactory.create(id=1, name="Acme", top_up=50, email_status=True)],
        [UserFactory.create(last_name="Quiet", company_id=1, tokens=100, email_status=False)],
    )

    assert _names_in_section(report, "Users Emailed") == []
    assert _names_in_section(report, "Users Not Emailed") == ["Quiet"]
    assert "\t\t  New Token Balance 150" in report


@pytest.mark.unit
def test_no_changes_renders_blank_line_only():
    report = _render([CompanyFactory.create(id=1)], [])

    assert report == "\n"


@pytest.mark.unit
def test_missing_display_values_render_empty():
    report = _render(
        [CompanyFactory.create(id=1, name=None, top_up=1)],
        [UserFactory.create(company_id=1, first_name=None, last_name=None, email=None)],
    )

    assert "\tCompany Name: \n" in report
    assert "\t\t, , \n" in report
    assert "\t\tTotal amount of top ups for : 1\n" in report


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_companies_in_ascending_numeric_order():
    raw_companies = [CompanyFactory.create(id=i) for i in (10, 2, 1)]
    raw_users = [UserFactory.create(company_id=i) for i in (10, 2, 1)]

    assert _company_ids_in(_render(raw_companies, raw_users)) == ["1", "2", "10"]


@pytest.mark.unit
def test_only_companies_with_changes_appear():
    raw_companies = [
        CompanyFactory.create(id=1),
        CompanyFactory.create(id=2),
        CompanyFactory.create(id=3),
    ]
    raw_users = [
        UserFactory.create(company_id=1),
        UserFactory.create(company_id=3, active_status=False),
    ]

    assert _company_ids_in(_render(raw_companies, raw_users)) == ["1"]


@pytest.mark.unit
def test_mixed_id_types_put_numbers_first():
    assert sorted_company_ids(["b", 3, "a", 1.5]) == [1.5, 3, "a", "b"]


@pytest.mark.unit
def test_users_sorted_by_last_name_within_sections():
    raw_companies = [CompanyFactory.create(id=1, email_status=True)]
    raw_users = [
        UserFactory.create(company_id=1, last_name="Young", email_status=True),
        UserFactory.create(company_id=1, last_name="Brown", email_status=False),
        UserFactory.create(company_id=1, last_name="Adams", email_status=True),
        UserFactory.create(company_id=1, last_name="Allen", email_status=False),
    ]

    report = _render(raw_companies, raw_users)

    assert _names_in_section(report, "Users Emailed") == ["Adams", "Young"]
    assert _names_in_section(report, "Users Not Emailed") == ["Allen", "Brown"]


@pytest.mark.unit
def test_equal_last_names_keep_input_order():
    raw_companies = [CompanyFactory.create(id=1)]
    raw_users = [
        UserFactory.create(company_id=1, last_name="Smith", first_name="Zoe"),
        UserFactory.create(company_id=1, last_name="Smith", first_name="Abe"),
    ]

    report = _render(raw_companies, raw_users)

    assert report.index("Smith, Zoe") < report.index("Smith, Abe")


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_total_counts_both_sections():
    companies = get_companies([CompanyFactory.create(id=1, name="Acme", top_up=5)])
    users = get_users(
        [
            UserFactory.create(company_id=1, email_status=True),
            UserFactory.create(company_id=1, email_status=False),
            UserFactory.create(company_id=1, email_status=False),
        ]
    )
    user_uuid_to_user = index_by_uuid(users)
    changes = batch_top_up(
        companies, get_company_id_to_user_uuids(users), user_uuid_to_user
    )

    lines = get_company_report(companies[0], changes, user_uuid_to_user)

    assert lines[-1] == "\t\tTotal amount of top ups for Acme: 15"


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_generate_report_overwrites_target(tmp_path):
    output = tmp_path / "output.txt"
    output.write_text("stale", encoding="utf-8")

    content = generate_report([], {}, {}, output)

    assert output.read_text(encoding="utf-8") == content == "\n"
    assert [p.name for p in tmp_path.iterdir()] == ["output.txt"]


@pytest.mark.unit
def test_unwritable_destination_leaves_nothing(tmp_path):
    output = tmp_path / "missing-dir" / "output.txt"

    with pytest.raises(ReportWriteError) as exc_info:
        write_report("\n", output)

    assert exc_info.value.path == str(output)
    assert not output.exists()


@pytest.mark.unit
def test_rewrite_keeps_existing_report_mode(tmp_path):
    output = tmp_path / "output.txt"
    output.write_text("previous run\n", encoding="utf-8")
    os.chmod(output, 0o600)

    write_report("\n", output)

    assert stat.S_IMODE(output.stat().st_mode) == 0o600
    assert output.read_text(encoding="utf-8") == "\n"


@pytest.mark.unit
def test_new_report_mode_follows_umask(tmp_path):
    output = tmp_path / "output.txt"
    previous_umask = os.umask(0o027)
    try:
        write_report("\n", output)
    finally:
        os.umask(previous_umask)

    assert stat.S_IMODE(output.stat().st_mode) == 0o640
