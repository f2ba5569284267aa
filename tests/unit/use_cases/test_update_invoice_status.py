"""Unit tests for UpdateInvoiceStatus use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return, Error
from src.app.use_cases.invoicing.dtos import UpdateInvoiceStatusCommandDTO
from src.app.use_cases.invoicing.update_invoice_status import UpdateInvoiceStatus
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_status import TransitionTrigger
from src.domain.organization_member import Permission
from tests.fixtures.factories import ORG_ID, USER_ID, make_invoice


@pytest.fixture
def mock_item_repo():
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_state_machine():
    machine = MagicMock()
    machine.transition = AsyncMock()
    return machine


@pytest.fixture
def use_case(mock_uow, mock_invoice_repo, mock_item_repo, mock_state_machine, access_verifier):
    return UpdateInvoiceStatus(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        invoice_item_repo=mock_item_repo,
        state_machine=mock_state_machine,
        access_verifier=access_verifier,
    )


def command(status: InvoiceStatus) -> UpdateInvoiceStatusCommandDTO:
    return UpdateInvoiceStatusCommandDTO(invoice_id="inv_1", status=status)


@pytest.mark.asyncio
class TestUpdateInvoiceStatus:

    async def test_manual_transition_committed(
        self, use_case, mock_invoice_repo, mock_state_machine, mock_uow, access_verifier
    ):
        invoice = make_invoice(status=InvoiceStatus.SENT)
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_state_machine.transition = AsyncMock(
            return_value=Return.ok(make_invoice(status=InvoiceStatus.CANCELLED))
        )

        result = await use_case.execute(command(InvoiceStatus.CANCELLED))

        assert result.is_ok()
        assert result.value.status == "cancelled"
        mock_state_machine.transition.assert_called_once_with(
            invoice, InvoiceStatus.CANCELLED, TransitionTrigger.MANUAL, actor_id=USER_ID
        )
        access_verifier.verify_access.assert_called_once_with(ORG_ID, Permission.UPDATE)
        mock_uow.commit.assert_called_once()

    async def test_same_status_is_a_no_op(
        self, use_case, mock_invoice_repo, mock_state_machine, mock_uow
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.SENT))

        result = await use_case.execute(command(InvoiceStatus.SENT))

        assert result.value.status == "sent"
        mock_state_machine.transition.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_rejected_transition_rolls_back(
        self, use_case, mock_invoice_repo, mock_state_machine, mock_uow
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice(status=InvoiceStatus.SENT))
        mock_state_machine.transition = AsyncMock(
            return_value=Return.err(Error(code="INVALID_STATUS_TRANSITION", message="no"))
        )

        result = await use_case.execute(command(InvoiceStatus.PAID))

        assert result.error.code == "INVALID_STATUS_TRANSITION"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
