import io
import unittest
from datetime import timedelta

import yaml

from shadow_expiry.database import ShadowFileDatabase
from shadow_expiry.enumeration import list_expirable_logins
from shadow_expiry.extractor import expiration_from_record
from shadow_expiry.models import NEVER_MARKER, ExpirableLogin
from shadow_expiry.report import (
    CSV_HEADERS,
    build_report,
    csv_rows,
    format_date,
    format_login,
    format_text,
    format_yaml,
    header_to_key,
    write_csv,
)

from tests.helpers import CHANGED_AT, SAMPLE_SHADOW, make_record

NOW = CHANGED_AT + timedelta(days=5)


def _entry(**overrides):
    record = make_record(**overrides)
    return ExpirableLogin(login=record.login, expiration=expiration_from_record(record))


class FormatDateTests(unittest.TestCase):

    def test_date(self):
        self.assertEqual(format_date(CHANGED_AT), "Jan 08, 2022")

    def test_never(self):
        self.assertEqual(format_date(NEVER_MARKER), "Never")


class FormatTextTests(unittest.TestCase):

    def test_single_login_block(self):
        expected = (
            "Login: alice\n"
            "Last password change: Jan 08, 2022\n"
            "Password expires: Apr 08, 2022\n"
            "Warning: 7\n"
            "Min password change allowed: 0\n"
            "Is it effective to notify now?  true\n"
        )
        self.assertEqual(format_login(_entry(), NOW), expected)

    def test_never_expires_block(self):
        text = format_login(_entry(login="carol", max_days=99999), NOW)
        self.assertIn("Password expires: Never\n", text)
        self.assertIn("Is it effective to notify now?  false\n", text)

    def test_never_last_change(self):
        text = format_login(_entry(last_changed_day=-1), NOW)
        self.assertIn("Last password change: Never\n", text)

    def test_blocks_separated_by_blank_line(self):
        text = format_text([_entry(login="a"), _entry(login="b", min_days=10)], NOW)
        blocks = text.split("\n\n")
        self.assertEqual(len(blocks), 3)
        self.assertTrue(blocks[0].startswith("Login: a\n"))
        self.assertTrue(blocks[1].startswith("Login: b\n"))
        self.assertTrue(blocks[1].endswith("notify now?  false"))
        self.assertEqual(blocks[2], "")

    def test_empty(self):
        self.assertEqual(format_text([], NOW), "")


class BuildReportTests(unittest.TestCase):

    def setUp(self):
        db = ShadowFileDatabase(str(SAMPLE_SHADOW))
        self.report = build_report(list_expirable_logins(db), now=NOW, source=db.path, skipped=db.skipped)

    def test_summary(self):
        summary = self.report.summary
        self.assertEqual(summary.total, 3)
        self.assertEqual(summary.expirable, 3)
        self.assertEqual(summary.notify_now, 1)
        self.assertEqual(summary.never_expires, 1)
        self.assertEqual(summary.skipped, 3)

    def test_accounts(self):
        by_login = {a.login: a for a in self.report.accounts}
        self.assertEqual(by_login["alice"].password_expires, "2022-04-08")
        self.assertEqual(by_login["alice"].last_password_change, "2022-01-08")
        self.assertTrue(by_login["alice"].notify_now)
        self.assertFalse(by_login["bob"].notify_now)
        self.assertIsNone(by_login["carol"].password_expires)
        self.assertIsNone(by_login["carol"].password_inactive)

    def test_metadata(self):
        self.assertEqual(self.report.metadata.source, str(SAMPLE_SHADOW))
        self.assertEqual(self.report.metadata.evaluated_at, NOW.isoformat())

    def test_yaml_document(self):
        doc = yaml.safe_load(format_yaml(self.report))
        self.assertEqual(list(doc.keys()), ["metadata", "summary", "accounts"])
        self.assertEqual([a["login"] for a in doc["accounts"]], ["alice", "bob", "carol"])
        self.assertIsNone(doc["accounts"][2]["password_expires"])


class CsvTests(unittest.TestCase):

    def test_header_to_key(self):
        self.assertEqual(header_to_key("Last Password Change"), "last_password_change")
        self.assertEqual(header_to_key(" Min  Days "), "min_days")

    def test_rows_match_headers(self):
        rows = csv_rows([_entry()], NOW)
        self.assertEqual(set(rows[0].keys()), {header_to_key(h) for h in CSV_HEADERS})

    def test_write_csv(self):
        buf = io.StringIO()
        write_csv(csv_rows([_entry(), _entry(login="carol", max_days=99999)], NOW), CSV_HEADERS, buf)
        lines = buf.getvalue().splitlines()
        self.assertEqual(lines[0], "Login,Last Password Change,Password Expires,Warning,Min Days,Notify Now")
        self.assertEqual(lines[1], 'alice,"Jan 08, 2022","Apr 08, 2022",7,0,true')
        self.assertEqual(lines[2], 'carol,"Jan 08, 2022",Never,7,0,false')


if __name__ == "__main__":
    unittest.main()
