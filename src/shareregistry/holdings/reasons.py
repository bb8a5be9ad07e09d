from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TransactionReason:
    code: str
    reason: str
    description: str


TRANSACTION_REASONS: tuple[TransactionReason, ...] = (
    TransactionReason("ADJ", "Adjustment", "Any adjustment where no specific reason code is applicable. For example, error fixing or unusual corporate actions"),
    TransactionReason("AFO", "Adjustment for foreign ownership", "Adjustments to CHESS Holdings due to divestment procedures for securities subject to CHESS foreign ownership restrictions"),
    TransactionReason("ALT", "Miscellaneous allotment", "Any allotment of securities where no specific reason code is applicable"),
    TransactionReason("BON", "Bonus issue allotment", "Allotment of shares in a bonus issue"),
    TransactionReason("BSP", "Bonus plan allotment", "Allotment of shares in a bonus share plan"),
    TransactionReason("BYB", "Buy back", "Removal of securities where a holder has failed to issue instructions for a compulsory buyback"),
    TransactionReason("CAL", "Call paid", "Payment of calls for partly paid shares of either a limited or no liability company"),
    TransactionReason("CAQ", "Compulsory acquisition by offeror", "Movement of securities from the client to the offeror for a takeover subject to a compulsory acquisition by the offeror"),
    TransactionReason("CNA", "Convertible note allotment", "Allotment of a convertible note"),
    TransactionReason("CNR", "Convertible note redemption / maturity", "Redemption or Maturity of a convertible note"),
    TransactionReason("CNV", "Miscellaneous conversion", "Conversions of securities other than convertible notes"),
    TransactionReason("CRI", "Collateral removal", "Security no longer meets the criteria for eligibility as collateral cover"),
    TransactionReason("CSC", "CHESS subregister closed", "Movement due to the CHESS subregister closing, for example, in the event of an Issuer being delisted"),
    TransactionReason("DIS", "Distribution in specie", "Allotment of securities as a result of a distribution in specie"),
    TransactionReason("DRP", "Dividend plan allotment", "Allotment of shares in a dividend reinvestment plan"),
    TransactionReason("DVM", "Divestment", "Adjustments to CHESS Holdings due to divestment procedures for securities other than those subject to CHESS foreign ownership restrictions"),
    TransactionReason("EXP", "Collateral removal", "The imminent expiry of a security used as collateral"),
    TransactionReason("FLT", "Float", "Allotment of securities as a result of a company float"),
    TransactionReason("FOR", "Forfeiture of partly paid shares", "Removal of shares on which a call has not been paid"),
    TransactionReason("IDA", "Income Distribution allotment", "Allotment of securities in a reinvestment of income other than dividend income, for example, interest, trust income"),
    TransactionReason("MER", "Company merger", "Allotment of securities as a result of a company merger"),
    TransactionReason("NCN", "Convertible note", "Conversion of a convertible note"),
    TransactionReason("NRE", "Non-renounceable issue allotment", "Allotment of new securities following acceptance of the issue"),
    TransactionReason("OEX", "Option exercised", "Option exercised"),
    TransactionReason("OPT", "Option allotment", "Allotment of options"),
    TransactionReason("PLC", "Placement", "Allotment due to a placement of securities"),
    TransactionReason("PRI", "Priority issue", "Effects of a priority issue"),
    TransactionReason("REC", "Reconstruction", "Effects of a capital reconstruction"),
    TransactionReason("RED", "Miscellaneous redemption", "Redemption of securities other than convertible notes"),
    TransactionReason("REV", "Allotment reversal", "Reversal of an allotment or transfer due to various errors/events"),
    TransactionReason("RHA", "Renounceable", "Removal of rights entitlements (rights securities) upon acceptance"),
    TransactionReason("RHE", "Renounceable rights entitlement allotment", "Allotment of rights entitlements (rights securities)"),
    TransactionReason("RHT", "Renounceable Rights Issue Allotment", "Allotment of new securities following acceptance of a rights entitlement OR Transformation of rights securities to new securities"),
    TransactionReason("SAR", "Sub-register archived", "Movement due to the CHESS sub-register being archived"),
    TransactionReason("SCD", "Scrip Dividend", "Payment of dividend in the form of securities"),
    TransactionReason("SOA", "Scheme of Arrangement", "Effects of a scheme of arrangement"),
    TransactionReason("SPP", "Share purchase plan", "Allotment of securities as a result of a share purchase plan"),
    TransactionReason("STP", "Share top-up plan", "Allotment of securities as a result of a share top up plan"),
    TransactionReason("TKA", "Takeover consideration allotment", "Allotment of securities as consideration from a takeover that is unconditional"),
    TransactionReason("WAL", "Warrant allotment", "Allotment of a warrant"),
    TransactionReason("WDL", "Warrant delivery", "Delivery of a warrant"),
    TransactionReason("WEX", "Warrant exercise", "Exercise of a warrant"),
    TransactionReason("WRL", "Warrant rollover", "Rollover of a warrant"),
    TransactionReason("WUX", "Warrant underlying exercise", "Exercise of the underlying security"),
)

_BY_CODE = {r.code: r for r in TRANSACTION_REASONS}


def find_reason(code: str | None) -> TransactionReason | None:
    if not code:
        return None
    return _BY_CODE.get(code.strip().upper())


def reason_label(code: str | None) -> str:
    """Human label for a reason code, or the raw code when it is unknown."""
    reason = find_reason(code)
    if reason is None:
        return code or ""
    return reason.reason
