import uuid
from typing import Optional

from logger import get_logger
from models.booking import PaymentResponse
from models.reservation import PaymentMethod, PaymentStatus, Reservation
from services.errors import InvalidPaymentMethodError, WorkflowStateError

logger = get_logger("payment")


class PaymentService:
    """Simulated payment: the operator picks a method and confirms or declines"""

    def process_payment(self, reservation: Reservation, method: Optional[PaymentMethod], confirmed: bool) -> PaymentResponse:
        if reservation.payment_status != PaymentStatus.PENDING:
            raise WorkflowStateError(
                f"Payment for {reservation.reservation_id} is already {reservation.payment_status.value}"
            )

        if confirmed and method is None:
            raise InvalidPaymentMethodError("Select a payment method before confirming payment")
        reservation.payment_method = method

        if not confirmed:
            reservation.payment_status = PaymentStatus.FAILED
            logger.info(f"Payment not confirmed for {reservation.reservation_id}")
            return PaymentResponse(
                success=False,
                message="Payment failed! Reservation cancelled.",
                reservation_id=reservation.reservation_id,
                status=reservation.payment_status,
                method=method
            )

        # Simulate payment success
        reservation.payment_status = PaymentStatus.COMPLETED
        reservation.transaction_id = f"TXN-{uuid.uuid4().hex[:12].upper()}"

        return PaymentResponse(
            success=True,
            message="Payment successful!",
            reservation_id=reservation.reservation_id,
            status=reservation.payment_status,
            method=method,
            transaction_id=reservation.transaction_id
        )
