import random
from utils.ip_generator import IPGenerator, MOCK_LOCATIONS


def _octets(ip: str):
    return [int(part) for part in ip.split(".")]


def test_session_ip_is_stable():
    gen = IPGenerator()
    assert gen.generate_session_ip("abc") == gen.generate_session_ip("abc")
    # Derived from the session id, not from process state
    assert IPGenerator().generate_session_ip("abc") == gen.generate_session_ip("abc")


def test_session_ip_ranges():
    gen = IPGenerator()
    for i in range(200):
        first, second, third, fourth = _octets(gen.generate_session_ip(f"session-{i}"))
        assert 1 <= first <= 223
        assert 0 <= second <= 254
        assert 0 <= third <= 254
        assert 1 <= fourth <= 254


def test_regional_prefixes():
    gen = IPGenerator(rng=random.Random(7))
    for _ in range(50):
        assert 80 <= _octets(gen.generate_realistic_ip("eu"))[0] <= 129
        assert 110 <= _octets(gen.generate_realistic_ip("asia"))[0] <= 159
        assert tuple(_octets(gen.generate_realistic_ip("us"))[:2]) in {(8, 8), (208, 67), (173, 252), (199, 16)}


def test_ip_info_is_deterministic():
    gen = IPGenerator()
    info = gen.get_ip_info("8.8.4.4")
    assert info == gen.get_ip_info("8.8.4.4")
    assert info in MOCK_LOCATIONS
