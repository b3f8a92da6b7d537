from fingerprint_token.token import DAY_MS, TokenIssuer, TokenVerifier, is_valid, issue

NOW = 1_700_000_000_000


def _clock(value: int):
    return lambda: value


def _token(expires_at: int, fp_hash: str = "0" * 64) -> dict:
    return {
        "uuid": "00000000-0000-4000-8000-000000000000",
        "issuedAt": expires_at - 1000,
        "expiresAt": expires_at,
        "fingerprintHash": fp_hash,
        "daysValid": 7,
        "version": 1,
    }


def test_expiry_boundary_is_strict() -> None:
    verifier = TokenVerifier(clock=_clock(NOW))
    assert verifier.verify(_token(NOW)).valid is False
    assert verifier.verify(_token(NOW)).reason == "token_expired"
    assert verifier.verify(_token(NOW + 1)).valid is True
    assert verifier.verify(_token(NOW - 1)).valid is False


def test_malformed_tokens_are_invalid_not_errors() -> None:
    verifier = TokenVerifier(clock=_clock(NOW))
    for bad in (None, "token", 42, [], {}, {"expiresAt": "tomorrow"}, {"expiresAt": True}, {"expiresAt": float("nan")}):
        result = verifier.verify(bad)
        assert result.valid is False
        assert result.reason == "malformed_token"


def test_fingerprint_binding() -> None:
    snapshot = {"a": 1, "b": 2}
    token = issue(snapshot, 7)
    assert is_valid(token, snapshot) is True
    assert is_valid(token, {"a": 1, "b": 3}) is False


def test_loose_mode_ignores_fingerprint() -> None:
    token = issue({"a": 1}, 7)
    assert is_valid(token) is True
    assert is_valid(token.to_dict()) is True

    verifier = TokenVerifier(clock=_clock(NOW))
    assert verifier.verify(_token(NOW + 1, fp_hash="not-a-hash")).valid is True
    assert verifier.verify({"expiresAt": NOW + 1}).valid is True


def test_empty_snapshot_is_strict_mode() -> None:
    token = issue({"a": 1}, 7)
    result = TokenVerifier().verify(token, {})
    assert result.valid is False
    assert result.reason == "fingerprint_mismatch"


def test_strict_mode_requires_stored_hash() -> None:
    verifier = TokenVerifier(clock=_clock(NOW))
    result = verifier.verify({"expiresAt": NOW + 1}, {"a": 1})
    assert result.valid is False
    assert result.reason == "fingerprint_mismatch"


def test_unencodable_snapshot_is_invalid() -> None:
    cyclic: dict = {}
    cyclic["me"] = cyclic
    result = TokenVerifier().verify(issue({"a": 1}), cyclic)
    assert result.valid is False
    assert result.reason == "malformed_snapshot"


def test_result_carries_wire_payload() -> None:
    token = issue({"a": 1})
    result = TokenVerifier().verify(token, {"a": 1})
    assert result.reason == "ok"
    assert result.payload == token.to_dict()


def test_scenario_same_snapshot_is_valid() -> None:
    token = issue({"a": 1, "b": 2}, 7)
    assert is_valid(token, {"a": 1, "b": 2}) is True


def test_scenario_reordered_keys_is_valid() -> None:
    token = issue({"a": 1, "b": 2}, 7)
    assert is_valid(token, {"b": 2, "a": 1}) is True


def test_scenario_type_change_is_invalid() -> None:
    token = issue({"a": 1}, 7)
    assert is_valid(token, {"a": "1"}) is False


def test_scenario_just_expired_token_is_invalid_in_loose_mode() -> None:
    issued_at = NOW
    token = TokenIssuer(clock=_clock(issued_at)).issue({"a": 1}, 1 / DAY_MS)
    assert token.expires_at == issued_at + 1
    assert TokenVerifier(clock=_clock(issued_at)).verify(token).valid is True
    assert TokenVerifier(clock=_clock(issued_at + 1)).verify(token).valid is False
    assert TokenVerifier(clock=_clock(issued_at + 2)).verify(token).valid is False


def test_huge_integer_expiry_is_not_an_error() -> None:
    verifier = TokenVerifier(clock=_clock(0))
    assert verifier.verify({"expiresAt": 10**400}).valid is True
    assert verifier.verify({"expiresAt": -(10**400)}).reason == "token_expired"


def test_huge_integer_in_snapshot_is_a_mismatch_not_an_error() -> None:
    token = issue({"a": 1})
    assert is_valid(token, {"a": 10**5000}) is False
