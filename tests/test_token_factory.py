"""
Unit Tests for the Token Factories
==================================
Open and members-only creation of fungible tokens.

Run: python -m pytest tests/test_token_factory.py -v
"""

import pytest

import sys
sys.path.insert(0, '.')

from daoplatform.accounts import ZERO_ADDRESS
from daoplatform.chain import Chain
from daoplatform.collectible import SimpleCollectible
from daoplatform.errors import (
    EligibilityError,
    InsufficientFunds,
    NotFoundError,
    ValidationError,
)
from daoplatform.factory import TokenFactory, TokenInfo, TokenMembersFactory
from daoplatform.identity import IdentityRegistry
from daoplatform.token import FungibleToken

MINT_PRICE = 10**18
FEE = 10**15
SUPPLY = 1_000_000 * 10**18


# ============================================================
# Test Fixtures
# ============================================================

@pytest.fixture
def chain():
    return Chain(timestamp=1_700_000_000)


@pytest.fixture
def deployer(chain):
    return chain.create_account(balance=100 * MINT_PRICE)


@pytest.fixture
def creator(chain):
    return chain.create_account(balance=100 * MINT_PRICE)


@pytest.fixture
def nft(chain, deployer):
    return SimpleCollectible(chain, deployer.address, "Test NFT", "TNFT", mint_price=MINT_PRICE)


@pytest.fixture
def registry(chain, deployer):
    return IdentityRegistry(chain, deployer.address)


@pytest.fixture
def factory(chain, deployer):
    return TokenFactory(chain, deployer.address)


@pytest.fixture
def members_factory(chain, deployer, registry, nft):
    return TokenMembersFactory(
        chain, deployer.address, registry.address, nft.address,
        creation_fee=FEE, min_collectibles_required=5,
    )


@pytest.fixture
def member(creator, registry, nft):
    registry.register_user(creator.address, "creator")
    nft.mint_batch(creator.address, 5, value=5 * MINT_PRICE)
    return creator


# ============================================================
# Open Factory Tests
# ============================================================

class TestTokenFactory:
    """Anyone may create a token."""

    def test_create_token(self, chain, factory, creator):
        """Whole supply minted to the creator, who owns the token."""
        address = factory.create_token(creator.address, "My Token", "MTK", SUPPLY)

        token = chain.contract_at(address)
        assert isinstance(token, FungibleToken)
        assert token.name == "My Token"
        assert token.symbol == "MTK"
        assert token.decimals == 18
        assert token.total_supply == SUPPLY
        assert token.balance_of(creator.address) == SUPPLY
        assert token.owner == creator.address
        assert token.balance_of(factory.address) == 0

    def test_registry_updated(self, factory, creator):
        address = factory.create_token(creator.address, "My Token", "MTK", SUPPLY)

        assert factory.total_tokens_created == 1
        assert factory.get_total_tokens_created() == 1
        assert factory.get_all_tokens() == [address]
        assert factory.get_token_by_index(0) == address
        assert factory.get_token_creator(address) == creator.address
        assert factory.is_token_from_factory(address) is True

    def test_emits_token_created(self, chain, factory, creator):
        address = factory.create_token(creator.address, "My Token", "MTK", SUPPLY)
        assert chain.last_event("TokenCreated", factory.address).args == {
            "token": address,
            "creator": creator.address,
            "name": "My Token",
            "symbol": "MTK",
            "initial_supply": SUPPLY,
        }

    def test_create_records_once(self, chain, factory, creator):
        contracts_before = len(chain.contracts)

        factory.create_token(creator.address, "Named", "NMD", 1)

        assert factory.total_tokens_created == 1
        assert len(chain.contracts) == contracts_before + 1
        assert len(chain.events("TokenCreated", factory.address)) == 1

    @pytest.mark.parametrize("name,symbol,supply,reason", [
        ("", "MTK", SUPPLY, "Name cannot be empty"),
        ("My Token", "", SUPPLY, "Symbol cannot be empty"),
        ("My Token", "MTK", 0, "Initial supply must be greater than 0"),
    ])
    def test_invalid_params(self, chain, factory, creator, name, symbol, supply, reason):
        contracts_before = len(chain.contracts)
        with pytest.raises(ValidationError) as exc:
            factory.create_token(creator.address, name, symbol, supply)
        assert exc.value.reason == reason
        assert factory.total_tokens_created == 0
        assert len(chain.contracts) == contracts_before

    def test_unknown_token(self, factory, creator):
        assert factory.is_token_from_factory(creator.address) is False
        with pytest.raises(NotFoundError) as exc:
            factory.get_token_creator(creator.address)
        assert exc.value.reason == "Token not created by this factory"

    def test_index_out_of_range(self, factory):
        with pytest.raises(NotFoundError):
            factory.get_token_by_index(0)

    def test_token_transfers(self, chain, factory, creator):
        token = chain.contract_at(factory.create_token(creator.address, "T", "T", 100))
        other = chain.create_account()

        assert token.transfer(creator.address, other.address, 40) is True
        assert token.balance_of(creator.address) == 60
        assert token.balance_of(other.address) == 40

        with pytest.raises(InsufficientFunds):
            token.transfer(other.address, creator.address, 41)
        with pytest.raises(ValidationError):
            token.transfer(creator.address, ZERO_ADDRESS, 1)


# ============================================================
# Members Factory Tests
# ============================================================

class TestTokenMembersFactory:
    """Gated creation with full records."""

    def test_create_token(self, chain, members_factory, member, deployer):
        deployer_before = chain.balance_of(deployer.address)

        address = members_factory.create_token(member.address, "My Token", "MTK", SUPPLY, value=FEE)

        assert chain.contract_at(address).balance_of(member.address) == SUPPLY
        assert chain.balance_of(deployer.address) == deployer_before + FEE
        assert members_factory.get_token_creation_fee() == FEE
        event = chain.last_event("TokenCreated", members_factory.address)
        assert event.args["fee_paid"] == FEE
        assert event.args["name"] == "My Token"
        assert event.args["token"] == address

    @pytest.mark.parametrize("paid", [FEE, 3 * FEE])
    def test_one_record_per_creation(self, chain, members_factory, member, deployer, paid):
        """Registry and listings grow by one; the whole payment is forwarded."""
        members_factory.create_token(member.address, "First", "ONE", 1, value=FEE)
        total_before = members_factory.get_total_tokens_created()
        user_before = members_factory.get_user_token_count(member.address)
        deployer_before = chain.balance_of(deployer.address)

        members_factory.create_token(member.address, "Second", "TWO", 2, value=paid)

        assert members_factory.get_total_tokens_created() == total_before + 1
        assert members_factory.get_user_token_count(member.address) == user_before + 1
        assert chain.balance_of(deployer.address) == deployer_before + paid

    def test_token_info(self, chain, members_factory, member):
        address = members_factory.create_token(member.address, "My Token", "MTK", SUPPLY, value=FEE)

        info = members_factory.get_token_info_by_address(address)
        assert info == TokenInfo(
            token_address=address,
            creator=member.address,
            name="My Token",
            symbol="MTK",
            initial_supply=SUPPLY,
            created_at=chain.now,
        )
        assert members_factory.get_token_by_index(0) == info
        assert members_factory.get_all_tokens() == [info]
        assert info.to_dict()["symbol"] == "MTK"

    def test_user_listings(self, members_factory, member):
        first = members_factory.create_token(member.address, "One", "ONE", 1, value=FEE)
        second = members_factory.create_token(member.address, "Two", "TWO", 2, value=FEE)

        assert members_factory.get_user_token_count(member.address) == 2
        assert [t.token_address for t in members_factory.get_user_tokens(member.address)] == [first, second]
        assert members_factory.get_user_token_by_index(member.address, 1).token_address == second

        with pytest.raises(NotFoundError) as exc:
            members_factory.get_user_token_by_index(member.address, 2)
        assert exc.value.reason == "Index out of range"

    def test_user_without_tokens(self, members_factory, creator):
        assert members_factory.get_user_tokens(creator.address) == []
        assert members_factory.get_user_token_count(creator.address) == 0

    def test_token_info_lookups(self, members_factory, creator):
        with pytest.raises(ValidationError) as exc:
            members_factory.get_token_info_by_address(ZERO_ADDRESS)
        assert exc.value.reason == "TokenMembersFactory: Token address cannot be zero"

        with pytest.raises(NotFoundError) as exc:
            members_factory.get_token_info_by_address(creator.address)
        assert exc.value.reason == "TokenMembersFactory: Token not created by this factory"

    def test_unregistered_rejected(self, members_factory, creator, nft):
        nft.mint_batch(creator.address, 5, value=5 * MINT_PRICE)
        with pytest.raises(EligibilityError) as exc:
            members_factory.create_token(creator.address, "T", "T", 1, value=FEE)
        assert exc.value.reason == "TokenMembersFactory: User must be registered"

    def test_insufficient_fee(self, chain, members_factory, member):
        before = chain.balance_of(member.address)
        with pytest.raises(EligibilityError) as exc:
            members_factory.create_token(member.address, "T", "T", 1, value=FEE - 1)
        assert exc.value.reason == "TokenMembersFactory: Insufficient fee paid"
        assert chain.balance_of(member.address) == before
        assert members_factory.get_total_tokens_created() == 0
        assert members_factory.get_user_token_count(member.address) == 0

    def test_invalid_params_after_fee(self, chain, members_factory, member):
        before = chain.balance_of(member.address)
        with pytest.raises(ValidationError) as exc:
            members_factory.create_token(member.address, "", "T", 1, value=FEE)
        assert exc.value.reason == "TokenMembersFactory: Name cannot be empty"
        assert chain.balance_of(member.address) == before

    def test_set_creation_fee(self, chain, members_factory, deployer):
        members_factory.set_creation_fee(deployer.address, 0)
        assert members_factory.get_token_creation_fee() == 0
        assert chain.last_event("FeeUpdated", members_factory.address).args == {
            "old_fee": FEE, "new_fee": 0,
        }


# ============================================================
# Run tests
# ============================================================

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
