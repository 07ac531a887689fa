r"""Top up report: changes grouped by company, split by email outcome.

Layout per company (tabs are part of the format consumers read)::

    <blank line>
    \tCompany Id: 1
    \tCompany Name: Blue Cat Inc.
    \tUsers Emailed:
    \t\tBoberson, Bob, bob.boberson@test.com
    \t\t  Previous Token Balance, 23
    \t\t  New Token Balance 94
    \tUsers Not Emailed:
    \t\tTotal amount of top ups for Blue Cat Inc.: 71

The file ends with one extra blank line.
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

from libs.common.logging import get_logger
from services.topup_service.exceptions import ReportWriteError
from services.topup_service.models import Company, TokenChange, User
from services.topup_service.schemas import is_numeric

logger = get_logger(__name__)


def _display(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _company_sort_key(company_id) -> tuple:
    # Numbers before strings if a file mixes both kinds of id
    if is_numeric(company_id):
        return (0, company_id, "")
    return (1, 0, str(company_id))


def sorted_company_ids(company_ids: Iterable) -> list:
    return sorted(company_ids, key=_company_sort_key)


def group_changes_by_company(
    token_changes: Iterable[TokenChange],
) -> dict[object, list[TokenChange]]:
    grouped: dict[object, list[TokenChange]] = {}
    for change in token_changes:
        grouped.setdefault(change.company_id, []).append(change)
    return grouped


def get_user_report(user: User, previous_tokens, new_tokens) -> list[str]:
    return [
        f"\t\t{_display(user.last_name)}, {_display(user.first_name)}, {_display(user.email)}",
        f"\t\t  Previous Token Balance, {_display(previous_tokens)}",
        f"\t\t  New Token Balance {_display(new_tokens)}",
    ]


def get_company_report(
    company: Company,
    token_changes: list[TokenChange],
    user_uuid_to_user: Mapping[str, User],
) -> list[str]:
    # sorted() is stable: equal last names keep their top up order
    sorted_changes = sorted(
        token_changes,
        key=lambda change: _display(user_uuid_to_user[change.user_uuid].last_name),
    )
    changes_with_email = [c for c in sorted_changes if c.email_sent]
    changes_without_email = [c for c in sorted_changes if not c.email_sent]
    total_company_top_up = sum(change.difference for change in token_changes)

    company_report = [
        "",
        f"\tCompany Id: {_display(company.id)}",
        f"\tCompany Name: {_display(company.name)}",
        "\tUsers Emailed:",
    ]
    for change in changes_with_email:
        company_report.extend(
            get_user_report(
                user_uuid_to_user[change.user_uuid],
                change.previous_tokens,
                change.new_tokens,
            )
        )

    company_report.append("\tUsers Not Emailed:")
    for change in changes_without_email:
        company_report.extend(
            get_user_report(
                user_uuid_to_user[change.user_uuid],
                change.previous_tokens,
                change.new_tokens,
            )
        )

    company_report.append(
        f"\t\tTotal amount of top ups for {_display(company.name)}: "
        f"{_display(total_company_top_up)}"
    )
    return company_report


def render_report(
    token_changes: Iterable[TokenChange],
    company_id_to_company: Mapping[object, Company],
    user_uuid_to_user: Mapping[str, User],
) -> str:
    """Render the whole report; companies without changes are left out."""
    token_changes_by_company_id = group_changes_by_company(token_changes)

    full_report: list[str] = []
    for company_id in sorted_company_ids(token_changes_by_company_id):
        full_report.extend(
            get_company_report(
                company_id_to_company[company_id],
                token_changes_by_company_id[company_id],
                user_uuid_to_user,
            )
        )
    return "".join(f"{line}\n" for line in full_report) + "\n"


def _report_file_mode(target: Path) -> int:
    """Keep an existing report's mode; new reports follow the umask."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_report(content: str, output_file: Union[str, Path]) -> None:
    """Replace ``output_file`` with ``content`` in one step.

    The text goes to a temporary file in the same directory first, so a
    failed run never leaves a half-written report behind.
    """
    target = Path(output_file)
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
    except OSError as e:
        raise ReportWriteError(
            f"Cannot write report to {output_file}: {e}", path=output_file
        ) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as out:
            out.write(content)
        os.chmod(tmp_path, _report_file_mode(target))
        os.replace(tmp_path, target)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise ReportWriteError(
            f"Cannot write report to {output_file}: {e}", path=output_file
        ) from e


def generate_report(
    token_changes: Iterable[TokenChange],
    company_id_to_company: Mapping[object, Company],
    user_uuid_to_user: Mapping[str, User],
    output_file: Union[str, Path],
) -> str:
    content = render_report(token_changes, company_id_to_company, user_uuid_to_user)
    write_report(content, output_file)
    logger.info("Wrote top up report to %s", output_file)
    return content
