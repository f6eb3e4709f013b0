from splunk_bucket_doctor.config import SplunkSettings
from splunk_bucket_doctor.execution.commands import SplunkCommands


def test_recovery_commands():
    commands = SplunkCommands("/opt/splunk/bin/splunk")

    assert commands.rebuild("/b/db/db_1_2_3") == [
        "/opt/splunk/bin/splunk",
        "rebuild",
        "/b/db/db_1_2_3",
    ]
    assert commands.export("/b/db/db_1_2_3", "/tmp/x.csv") == [
        "/opt/splunk/bin/splunk",
        "cmd",
        "exporttool",
        "/b/db/db_1_2_3",
        "/tmp/x.csv",
        "-csv",
    ]
    assert commands.import_("/b/db/db_1_2_3", "/tmp/x.csv") == [
        "/opt/splunk/bin/splunk",
        "cmd",
        "importtool",
        "/b/db/db_1_2_3",
        "/tmp/x.csv",
    ]


def test_fsck_scan_command():
    assert SplunkCommands("splunk").fsck_scan("main") == [
        "splunk",
        "fsck",
        "scan",
        "--all-buckets-one-index",
        "--index-name=main",
    ]


def test_list_indexes_adds_auth_only_when_configured():
    assert SplunkCommands("splunk").list_indexes() == ["splunk", "list", "index"]
    assert SplunkCommands("splunk", "admin:pw").list_indexes() == [
        "splunk",
        "list",
        "index",
        "-auth",
        "admin:pw",
    ]


def test_from_settings_uses_explicit_binary():
    settings = SplunkSettings(binary="/custom/splunk", username="admin", password="pw")
    commands = SplunkCommands.from_settings(settings)

    assert commands.executable == "/custom/splunk"
    assert commands.list_indexes()[-1] == "admin:pw"
