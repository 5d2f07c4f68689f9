import json
import logging
import contextlib

import indy
from django.conf import settings


class BaseWalletException(Exception):
    error_code = None
    error_message = None

    def __init__(self, error_message=None):
        self.error_message = error_message

    def __str__(self):
        return "%s: %s" % (self.__class__.__name__, self.error_message)


class WalletAlreadyExists(BaseWalletException):
    error_code = 1


class WalletNotCreated(BaseWalletException):
    error_code = 2


class WalletAccessDenied(BaseWalletException):
    error_code = 3


class WalletIsNotOpen(BaseWalletException):
    error_code = 5


class WalletOperationError(BaseWalletException):
    error_code = 7


class WalletItemNotFound(BaseWalletException):
    error_code = 8


INDY_ERRORS = {
    indy.error.ErrorCode.WalletNotFoundError: WalletNotCreated,
    indy.error.ErrorCode.WalletAccessFailed: WalletAccessDenied,
    indy.error.ErrorCode.WalletAlreadyExistsError: WalletAlreadyExists,
    indy.error.ErrorCode.WalletItemNotFound: WalletItemNotFound,
}


class WalletConnection:

    """Indy wallet holding pairwise identities of the agent"""

    def __init__(self, agent_name: str, pass_phrase: str):
        self.__agent_name = agent_name
        self.__pass_phrase = pass_phrase
        self.__handle = None
        cfg = {"id": self.make_wallet_address(agent_name)}
        cfg.update(settings.INDY.get('WALLET_SETTINGS', {}).get('config', {}))
        cred = {"key": self.__pass_phrase}
        cred.update(settings.INDY.get('WALLET_SETTINGS', {}).get('credentials', {}))
        self.__wallet_config = json.dumps(cfg)
        self.__wallet_credentials = json.dumps(cred)

    @contextlib.contextmanager
    def enter(self):
        if not self.__handle:
            raise WalletIsNotOpen(error_message='Open wallet at first')
        try:
            yield self.__handle
        except indy.error.IndyError as e:
            exception_cls = INDY_ERRORS.get(e.error_code, WalletOperationError)
            raise exception_cls(error_message=e.message) from e

    @property
    def agent_name(self):
        return self.__agent_name

    @property
    def is_open(self):
        return self.__handle is not None

    @staticmethod
    def make_wallet_address(agent_name):
        value = '{}_{}'.format(agent_name, 'wallet')
        for ch in ['-', '*', '?', '=']:
            value = value.replace(ch, '_')
        return value

    async def open(self):
        """Open already created wallet"""
        if self.__handle:
            await self.close()
        try:
            self.__handle = await indy.wallet.open_wallet(
                self.__wallet_config,
                self.__wallet_credentials
            )
        except indy.error.IndyError as e:
            exception_cls = INDY_ERRORS.get(e.error_code, WalletOperationError)
            raise exception_cls(error_message=e.message)
        logging.debug('Wallet "%s" is open' % self.__agent_name)

    async def close(self):
        if self.__handle:
            handle, self.__handle = self.__handle, None
            await indy.wallet.close_wallet(handle)

    async def get_pairwise(self, their_did: str) -> dict:
        with self.enter():
            info_str = await indy.pairwise.get_pairwise(self.__handle, their_did)
        info = json.loads(info_str)
        if info.get('metadata'):
            info['metadata'] = json.loads(info['metadata'])
        return info

