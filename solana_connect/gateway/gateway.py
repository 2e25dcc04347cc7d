"""
Wallet & Ledger Gateway: six single-call operations over one Solana RPC endpoint.

- connect: generate or import a keypair
- get_balance: SOL balance plus nonzero token / NFT holdings
- send_sol: one system-program transfer
- list_token_accounts: every SPL token account of an owner, zero balances included
- send_token: one SPL token transfer between associated token accounts
- list_transactions: most recent signatures with success/failed status

Each call opens a fresh client and issues its RPC requests sequentially.
Nothing is cached or retried; remote errors surface as RequestFailed /
TransferFailed with the node's message attached.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Callable

from solana.rpc.api import Client
from solana.rpc.types import TokenAccountOpts
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams as SystemTransferParams
from solders.system_program import transfer as system_transfer
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import TransferParams as TokenTransferParams
from spl.token.instructions import get_associated_token_address
from spl.token.instructions import transfer as token_transfer

from solana_connect.config.env import mask_rpc_url
from solana_connect.config.settings import GatewayConfig
from solana_connect.core.exceptions import TransferFailed
from solana_connect.gateway.client import (
    get_connection,
    get_resp_value,
    keyed_account_pubkey,
    parsed_info,
    rpc_errors,
    signature_fields,
)
from solana_connect.logging import get_logger, short_address
from solana_connect.utils.wallet_utils import to_pubkey
from solana_connect.wallet.keys import export_secret, generate_keypair, load_keypair
from solana_connect.wallet.models import (
    TX_STATUS_FAILED,
    TX_STATUS_SUCCESS,
    BalanceReport,
    TokenAccountInfo,
    TokenHolding,
    TransactionRecord,
    TransferResult,
    WalletInfo,
)

logger = get_logger(__name__)

SOL_DECIMALS = 9
LAMPORTS_PER_SOL = 10**SOL_DECIMALS
DEFAULT_TX_LIMIT = 10
# getSignaturesForAddress rejects limits above this
MAX_TX_LIMIT = 1000

ConnectionFactory = Callable[..., Client]


def parse_amount(amount: float | int | str | Decimal) -> Decimal:
    """Whole-unit amount as a Decimal. Raises ValueError unless it is a positive finite number."""
    if isinstance(amount, bool):
        raise ValueError("amount must be a number")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise ValueError(f"amount must be a number, got {amount!r}") from e
    if not value.is_finite() or value <= 0:
        raise ValueError(f"amount must be positive, got {amount!r}")
    return value


def to_raw_amount(amount: float | int | str | Decimal, decimals: int) -> int:
    """
    Scale a whole-unit amount to integer base units, rounding half-up.

    Uses decimal arithmetic on str(amount) so 1.5 SOL is exactly 1_500_000_000 lamports.
    """
    value = parse_amount(amount)
    raw = int((value * (Decimal(10) ** decimals)).to_integral_value(rounding=ROUND_HALF_UP))
    if raw <= 0:
        raise ValueError(f"amount {amount!r} is below the smallest unit (decimals={decimals})")
    return raw


def sol_to_lamports(amount: float | int | str | Decimal) -> int:
    return to_raw_amount(amount, SOL_DECIMALS)


def build_sol_transfer_instruction(sender: Pubkey, recipient: Pubkey, lamports: int) -> Instruction:
    return system_transfer(
        SystemTransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports)
    )


def build_token_transfer_instruction(
    source_ata: Pubkey,
    dest_ata: Pubkey,
    owner: Pubkey,
    raw_amount: int,
) -> Instruction:
    return token_transfer(
        TokenTransferParams(
            program_id=TOKEN_PROGRAM_ID,
            source=source_ata,
            dest=dest_ata,
            owner=owner,
            amount=raw_amount,
        )
    )


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class WalletGateway:
    """
    Stateless facade over one Solana RPC endpoint.

    config is injected; the environment is never read here. Every network
    operation takes an optional rpc_url that overrides config.rpc_url for that call.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        connection_factory: ConnectionFactory = get_connection,
    ) -> None:
        self.config = config or GatewayConfig()
        self._connection_factory = connection_factory

    def _client(self, rpc_url: str | None) -> Client:
        cfg = self.config.with_rpc_url(rpc_url)
        logger.debug("rpc_client_open", rpc=mask_rpc_url(cfg.rpc_url), commitment=cfg.commitment)
        return self._connection_factory(cfg.rpc_url, commitment=cfg.commitment, timeout=cfg.timeout)

    # ------------------------------------------------------------------
    # Wallet
    # ------------------------------------------------------------------

    def connect(self, key_material: str | None = None) -> WalletInfo:
        """
        Generate a new wallet when key_material is empty, otherwise import it.

        Imported material is echoed back unchanged as private_key. Raises
        InvalidKeyMaterial when it is neither a byte list nor base58.
        """
        if not key_material:
            keypair = generate_keypair()
            address = str(keypair.pubkey())
            logger.info("wallet_generated", address=short_address(address))
            return WalletInfo(address=address, private_key=export_secret(keypair), keypair=keypair)
        keypair = load_keypair(key_material)
        address = str(keypair.pubkey())
        logger.info("wallet_imported", address=short_address(address))
        return WalletInfo(address=address, private_key=key_material, keypair=keypair)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _token_accounts(self, client: Client, owner: Pubkey) -> list[Any]:
        with rpc_errors("getTokenAccountsByOwner"):
            resp = client.get_token_accounts_by_owner_json_parsed(
                owner, TokenAccountOpts(program_id=TOKEN_PROGRAM_ID)
            )
            return list(get_resp_value(resp) or [])

    def get_balance(self, address: str, *, rpc_url: str | None = None) -> BalanceReport:
        """
        SOL balance and nonzero token holdings of address.

        A holding with decimals 0 and raw amount "1" is reported as an NFT
        (balance 1); every other nonzero holding is a fungible token.
        """
        owner = to_pubkey(address)
        client = self._client(rpc_url)
        with rpc_errors("getBalance"):
            lamports = int(get_resp_value(client.get_balance(owner)) or 0)
        accounts = self._token_accounts(client, owner)

        tokens: list[TokenHolding] = []
        nfts: list[TokenHolding] = []
        with rpc_errors("getTokenAccountsByOwner"):
            for acct in accounts:
                info = parsed_info(acct)
                token_amount = info["tokenAmount"]
                balance = token_amount.get("uiAmount")
                if balance is None:
                    balance = float(token_amount.get("uiAmountString") or 0)
                if balance <= 0:
                    continue
                if token_amount.get("decimals") == 0 and token_amount.get("amount") == "1":
                    nfts.append(TokenHolding(mint=info["mint"], balance=1))
                else:
                    tokens.append(TokenHolding(mint=info["mint"], balance=float(balance)))

        report = BalanceReport(sol=lamports / LAMPORTS_PER_SOL, tokens=tokens, nfts=nfts)
        logger.debug(
            "balance_fetched",
            address=short_address(address),
            sol=report.sol,
            token_count=len(tokens),
            nft_count=len(nfts),
        )
        return report

    def list_token_accounts(self, address: str, *, rpc_url: str | None = None) -> list[TokenAccountInfo]:
        """All SPL token accounts owned by address, zero balances included."""
        owner = to_pubkey(address)
        client = self._client(rpc_url)
        accounts = self._token_accounts(client, owner)
        out: list[TokenAccountInfo] = []
        with rpc_errors("getTokenAccountsByOwner"):
            for acct in accounts:
                info = parsed_info(acct)
                token_amount = info["tokenAmount"]
                out.append(
                    TokenAccountInfo(
                        mint=info["mint"],
                        balance=str(token_amount["uiAmountString"]),
                        decimals=int(token_amount["decimals"]),
                        address=keyed_account_pubkey(acct),
                    )
                )
        return out

    def list_transactions(
        self,
        address: str,
        limit: int = DEFAULT_TX_LIMIT,
        *,
        rpc_url: str | None = None,
    ) -> list[TransactionRecord]:
        """
        Most recent confirmed signatures for address, newest first.

        status is "failed" when the node reported an error for the signature, else "success".
        """
        if not 1 <= limit <= MAX_TX_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_TX_LIMIT}, got {limit}")
        owner = to_pubkey(address)
        client = self._client(rpc_url)
        with rpc_errors("getSignaturesForAddress"):
            entries = list(get_resp_value(client.get_signatures_for_address(owner, limit=limit)) or [])
            records = []
            for entry in entries[:limit]:
                signature, slot, block_time, err = signature_fields(entry)
                records.append(
                    TransactionRecord(
                        signature=signature,
                        slot=slot,
                        block_time=block_time,
                        status=TX_STATUS_FAILED if err is not None else TX_STATUS_SUCCESS,
                    )
                )
        return records

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def _submit(self, client: Client, keypair: Keypair, instruction: Instruction) -> str:
        """Sign a single-instruction transaction against the latest blockhash and send it."""
        with rpc_errors("getLatestBlockhash", TransferFailed):
            blockhash: Hash = get_resp_value(client.get_latest_blockhash()).blockhash
        message = Message.new_with_blockhash([instruction], keypair.pubkey(), blockhash)
        tx = Transaction([keypair], message, blockhash)
        with rpc_errors("sendTransaction", TransferFailed):
            return str(get_resp_value(client.send_transaction(tx)))

    def send_sol(
        self,
        sender_key_material: str,
        recipient_address: str,
        amount: float | int | str | Decimal,
        *,
        rpc_url: str | None = None,
    ) -> TransferResult:
        """
        Transfer amount SOL from the sender to recipient_address.

        Single-shot: calling again submits a new transaction.
        """
        keypair = load_keypair(sender_key_material)
        recipient = to_pubkey(recipient_address, "recipient")
        lamports = sol_to_lamports(amount)
        sender = str(keypair.pubkey())
        client = self._client(rpc_url)

        ix = build_sol_transfer_instruction(keypair.pubkey(), recipient, lamports)
        try:
            signature = self._submit(client, keypair, ix)
        except TransferFailed:
            logger.warning(
                "sol_transfer_failed",
                sender=short_address(sender),
                recipient=short_address(recipient_address),
                lamports=lamports,
            )
            raise
        logger.info(
            "sol_transfer_submitted",
            signature=signature,
            sender=short_address(sender),
            recipient=short_address(recipient_address),
            lamports=lamports,
        )
        return TransferResult(
            signature=signature,
            sender=sender,
            recipient=recipient_address,
            amount=float(amount),
            timestamp=_utc_now_iso(),
        )

    def get_mint_decimals(self, client: Client, mint: Pubkey) -> int:
        with rpc_errors("getAccountInfo", TransferFailed):
            value = get_resp_value(client.get_account_info_json_parsed(mint))
            if value is None:
                raise TransferFailed(f"Mint account {mint} not found", method="getAccountInfo")
            return int(parsed_info(value)["decimals"])

    def send_token(
        self,
        sender_key_material: str,
        recipient_address: str,
        mint_address: str,
        amount: float | int | str | Decimal,
        *,
        rpc_url: str | None = None,
    ) -> TransferResult:
        """
        Transfer amount tokens of mint_address between the associated token accounts
        of sender and recipient.

        Both associated token accounts must already exist; a missing recipient
        account fails with the token program's error as TransferFailed.
        """
        keypair = load_keypair(sender_key_material)
        recipient = to_pubkey(recipient_address, "recipient")
        mint = to_pubkey(mint_address, "mint")
        value = parse_amount(amount)
        sender = str(keypair.pubkey())

        source_ata = get_associated_token_address(keypair.pubkey(), mint)
        dest_ata = get_associated_token_address(recipient, mint)

        client = self._client(rpc_url)
        decimals = self.get_mint_decimals(client, mint)
        raw_amount = to_raw_amount(value, decimals)

        ix = build_token_transfer_instruction(source_ata, dest_ata, keypair.pubkey(), raw_amount)
        try:
            signature = self._submit(client, keypair, ix)
        except TransferFailed:
            logger.warning(
                "token_transfer_failed",
                mint=short_address(mint_address),
                sender=short_address(sender),
                recipient=short_address(recipient_address),
                raw_amount=raw_amount,
            )
            raise
        logger.info(
            "token_transfer_submitted",
            signature=signature,
            mint=short_address(mint_address),
            sender=short_address(sender),
            recipient=short_address(recipient_address),
            raw_amount=raw_amount,
            decimals=decimals,
        )
        return TransferResult(
            signature=signature,
            sender=sender,
            recipient=recipient_address,
            amount=float(amount),
            timestamp=_utc_now_iso(),
            mint=mint_address,
        )
