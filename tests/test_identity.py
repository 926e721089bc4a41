from core.identity import Identity, extract_identity, has_subdomain


def test_subdomain_host_takes_short_from_hostname():
    assert extract_identity("https://short.nav.ms/tenant1/gcc") == Identity("short", "tenant1", "gcc")


def test_apex_host_takes_everything_from_path():
    assert extract_identity("https://nav.ms/admin/contoso.com/dod") == Identity("admin", "contoso.com", "dod")


def test_values_are_lowercased():
    assert extract_identity("https://Admin.NAV.ms/Contoso.COM/GCC") == Identity("admin", "contoso.com", "gcc")
    assert extract_identity("https://nav.ms/ADMIN") == Identity("admin", None, None)


def test_leading_slashes_are_stripped():
    assert extract_identity("https://nav.ms///admin/contoso.com") == Identity("admin", "contoso.com", None)


def test_missing_segments_are_none():
    assert extract_identity("https://go.example.com/") == Identity("go", None, None)
    assert extract_identity("https://nav.ms/") == Identity(None, None, None)
    assert extract_identity("https://nav.ms/admin//gcc") == Identity("admin", None, "gcc")


def test_segments_beyond_cloud_are_ignored():
    assert extract_identity("https://nav.ms/admin/contoso.com/gcc/extra") == Identity("admin", "contoso.com", "gcc")


def test_query_string_is_not_part_of_identity():
    assert extract_identity("https://nav.ms/admin/contoso.com?x=1") == Identity("admin", "contoso.com", None)


def test_has_subdomain():
    assert has_subdomain("https://admin.nav.ms/")
    assert not has_subdomain("https://nav.ms/admin")
