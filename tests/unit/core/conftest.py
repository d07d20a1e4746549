"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_TESTPAD = '''\
SCRIPT
Name,Checkout flow
Description,"Covers the basket, payment and receipt."
See https://example.com/docs for setup
Version,3

number,indent,text
1,0,Basket
2,1,Add an item to the basket
3,1,"// Prices include VAT, check the total"
4,0,Payment
5,1,"Pay with a card named ""Test""
and confirm the receipt"
6,1,-- optional: retry on failure
,,
7,x,Refresh the page

REPORT COMMENTS
Tester,Date
'''


@pytest.fixture(name="sample_content")
def sample_content_fixture():
    return SAMPLE_TESTPAD


@pytest.fixture(name="sample_file")
def sample_file_fixture(tmp_path):
    f = tmp_path / "checkout.csv"
    f.write_text(SAMPLE_TESTPAD, encoding="utf-8")
    return f
