from enum import StrEnum


class PaymentMethod(StrEnum):
    CASH = 'cash'
    CARD = 'card'
    BANK = 'bank'
    ONLINE = 'online'
