"""Shared fixtures for integration tests"""

import pytest


PAD = '''\
SCRIPT
Name,Signup
Description,Create an account.
Docs: [guide](https://example.com/guide)
number,indent,text
1,0,Account form
2,1,Enter email
3,1,// use a throwaway address
4,1,Submit
REPORT COMMENTS
'''


@pytest.fixture(name="pad_file")
def pad_file_fixture(tmp_path):
    f = tmp_path / "signup.csv"
    f.write_text(PAD, encoding="utf-8")
    return f


@pytest.fixture(name="db_url")
def db_url_fixture(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path}/test.db"
    monkeypatch.setenv("BETAPAD_DB_URL", url)
    return url
