"""Tests for BankService and the bank/list response normalisation."""

import httpx
import pytest
from pydantic import ValidationError

from gmclient.exceptions import ApiError, UnexpectedResponseError
from gmclient.resources.bank import BankAccount, CompanyBearer, PrivateBearer
from gmclient.schemas.bank import AccountType
from gmclient.services.bank import BankService, extract_items
from tests.conftest import account_record, envelope, make_fake_ctx, mock_endpoint

ACC1 = account_record("ACC1", 100.0, "Firma", "Acme GmbH")
ACC2 = account_record("ACC2", 250.25, "Privatkonto", "Steve")


class TestExtractItems:
    """Test normalisation of the bank/list payload shapes."""

    def test_list(self):
        """Test a plain list is returned as is."""
        assert extract_items([ACC1, ACC2]) == [ACC1, ACC2]

    def test_empty_list(self):
        """Test an empty list yields no items."""
        assert extract_items([]) == []

    @pytest.mark.parametrize("key", ["accounts", "list", "results", "data"])
    def test_conventional_keys(self, key):
        """Test lists under the conventional keys are found."""
        assert extract_items({key: [ACC1, ACC2], "count": 2}) == [ACC1, ACC2]

    def test_conventional_key_order(self):
        """Test conventional keys are checked in order."""
        data = {"data": [ACC2], "accounts": [ACC1]}

        assert extract_items(data) == [ACC1]

    def test_first_list_field(self):
        """Test the first list-valued field is used."""
        assert extract_items({"count": 2, "entries": [ACC1, ACC2]}) == [ACC1, ACC2]

    def test_object_map(self):
        """Test the values of an id-to-record object are used."""
        assert extract_items({"ACC1": ACC1, "ACC2": ACC2}) == [ACC1, ACC2]

    def test_empty_object(self):
        """Test an empty object yields no items."""
        assert extract_items({}) == []

    def test_object_with_scalar_values_is_rejected(self):
        """Test an object of scalars is rejected."""
        with pytest.raises(UnexpectedResponseError) as exc_info:
            extract_items({"count": 2, "ACC1": ACC1})

        assert exc_info.value.endpoint == "bank/list"

    @pytest.mark.parametrize("data", [None, "accounts", 42])
    def test_non_collection_is_rejected(self, data):
        """Test payloads without a collection are rejected."""
        with pytest.raises(UnexpectedResponseError):
            extract_items(data)

    def test_unexpected_response_is_api_error(self):
        """Test the shape error is an ApiError."""
        with pytest.raises(ApiError):
            extract_items(None)


class TestBankServiceGet:
    """Test BankService.get."""

    @pytest.mark.asyncio
    async def test_get_returns_new_instance_per_call(self):
        """Test every get returns a new account instance."""
        ctx = make_fake_ctx({"bank/info": {"account": ACC1}})
        service = BankService(ctx)

        first = await service.get("ACC1")
        second = await service.get("ACC1")

        assert first is not second
        first.balance = 0.0
        assert second.balance == 100.0
        assert ctx.fetch_data.await_count == 2

    @pytest.mark.asyncio
    async def test_get_in_lazy_mode_does_not_fetch(self):
        """Test get in lazy mode sends no request."""
        ctx = make_fake_ctx({"bank/info": {"account": ACC1}}, lazy=True)

        account = await BankService(ctx).get("ACC1")

        assert account.is_loaded is False
        ctx.fetch_data.assert_not_awaited()
        ctx.handle_operation.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_load_runs_precheck_before_fetch(self):
        """Test load checks the quota before fetching."""
        ctx = make_fake_ctx({"bank/info": {"account": ACC1}}, lazy=True)
        account = await BankService(ctx).get("ACC1")

        await account.load()

        ctx.handle_operation.assert_awaited_once_with()
        ctx.fetch_data.assert_awaited_once()
        _, endpoint, params, _ = ctx.fetch_data.await_args.args
        assert endpoint == "bank/info"
        assert params == {"accountNumber": "ACC1"}


class TestBankServiceListAll:
    """Test BankService.list_all with the mocked API."""

    def _assert_accounts(self, accounts):
        assert [a.account_number for a in accounts] == ["ACC1", "ACC2"]
        assert all(isinstance(a, BankAccount) and a.is_loaded for a in accounts)

        company, private = accounts
        assert company.balance == 100.0
        assert company.account_type is AccountType.COMPANY
        assert company.bearer == CompanyBearer("Acme GmbH")
        assert private.balance == 250.25
        assert private.account_type is AccountType.PRIVATE
        assert isinstance(private.bearer, PrivateBearer)
        assert private.bearer.player.player_name == "Steve"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"ACC1": ACC1, "ACC2": ACC2},
            [ACC1, ACC2],
            {"accounts": [ACC1, ACC2]},
        ],
        ids=["object-map", "array", "accounts-key"],
    )
    async def test_list_all_tolerates_shapes(self, payload, api_mock, api_info_route, make_client):
        """Test all supported list shapes are accepted."""
        list_route = mock_endpoint(api_mock, "bank/list", httpx.Response(200, json=envelope(payload)))
        client = await make_client(lazy_mode=True)

        accounts = await client.bank().list_all()

        self._assert_accounts(accounts)
        assert list_route.call_count == 1

    @pytest.mark.asyncio
    async def test_list_all_loads_nested_players_when_not_lazy(
        self, api_mock, api_info_route, make_client
    ):
        """Test listed private accounts load their players."""
        mock_endpoint(api_mock, "bank/list", httpx.Response(200, json=envelope([ACC1, ACC2])))
        uuid_route = mock_endpoint(
            api_mock, "util/uuid", httpx.Response(200, json=envelope({"uuid": "uuid-steve"}))
        )
        client = await make_client()

        accounts = await client.bank().list_all()

        assert accounts[1].bearer.player.uuid == "uuid-steve"
        assert uuid_route.call_count == 1

    @pytest.mark.asyncio
    async def test_list_all_leaves_nested_players_unloaded_when_lazy(
        self, api_mock, api_info_route, make_client
    ):
        """Test listed private accounts keep players unloaded in lazy mode."""
        mock_endpoint(api_mock, "bank/list", httpx.Response(200, json=envelope([ACC1, ACC2])))
        uuid_route = mock_endpoint(
            api_mock, "util/uuid", httpx.Response(200, json=envelope({"uuid": "uuid-steve"}))
        )
        client = await make_client(lazy_mode=True)

        accounts = await client.bank().list_all()

        assert accounts[1].bearer.player.uuid is None
        assert uuid_route.call_count == 0

    @pytest.mark.asyncio
    async def test_single_malformed_entry_fails_whole_call(self):
        """Test one malformed record fails the whole listing."""
        broken = dict(ACC2, accountType="Firmenkonto")
        ctx = make_fake_ctx({"bank/list": [ACC1, broken]})

        with pytest.raises(ValidationError):
            await BankService(ctx).list_all()

    @pytest.mark.asyncio
    async def test_list_all_runs_precheck(self):
        """Test listing checks the quota before fetching."""
        ctx = make_fake_ctx({"bank/list": []})

        assert await BankService(ctx).list_all() == []
        ctx.handle_operation.assert_awaited_once_with()
