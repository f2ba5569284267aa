"""Payment API Routes"""

from fastapi import APIRouter, Depends, status

from src.adapter.wiring import UseCaseFactory
from src.api.error import raise_for_error
from src.api.schemas.payment_request import PaymentRequestSchema
from src.app.use_cases.payments.dtos import (
    CreatePaymentCommandDTO,
    CreatePaymentResponseDTO,
    DeletePaymentResponseDTO,
    PaymentListResponseDTO,
    PaymentSummaryDTO,
)
from src.depends import get_use_cases

router = APIRouter(tags=["Payments"])


@router.post(
    "/invoices/{invoice_id}/payments",
    response_model=CreatePaymentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Amount exceeds the remaining balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Payment amount exceeds remaining balance of 18.00 EUR",
                            "details": {"amount": ["Must not exceed 18.00"]},
                        }
                    }
                }
            },
        },
        409: {"description": "Invoice is a draft or cancelled"},
    },
)
async def create_payment(
    invoice_id: str,
    request: PaymentRequestSchema,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Record a payment.

    The invoice becomes paid once payments reach its total (0.01 tolerance).
    """
    command = CreatePaymentCommandDTO(
        invoice_id=invoice_id,
        amount=request.amount,
        payment_date=request.payment_date,
        method=request.method,
        reference=request.reference,
        notes=request.notes,
    )
    result = await use_cases.create_payment().execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/invoices/{invoice_id}/payments", response_model=PaymentListResponseDTO)
async def list_invoice_payments(
    invoice_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.list_invoice_payments().execute(invoice_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/invoices/{invoice_id}/payments/summary", response_model=PaymentSummaryDTO)
async def get_payment_summary(
    invoice_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    result = await use_cases.get_payment_summary().execute(invoice_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/payments/{payment_id}", response_model=DeletePaymentResponseDTO)
async def delete_payment(
    payment_id: str,
    use_cases: UseCaseFactory = Depends(get_use_cases),
):
    """
    Reverse a payment.

    A paid invoice that falls below its total returns to overdue when its
    due date has passed, otherwise to sent.
    """
    result = await use_cases.delete_payment().execute(payment_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
