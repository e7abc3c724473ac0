# workers.py
# Threads para chamadas de rede (consulta de CNPJ e IA) sem travar a interface

from typing import Any, Callable, Set, cast

from PyQt6.QtCore import QThread, pyqtSignal

# Threads em execução. A referência fica aqui até o fim de run(), mesmo que a
# tela que iniciou a chamada seja fechada antes.
_RUNNING: Set["CallWorker"] = set()


class CallWorker(QThread):
    """Executa uma função em segundo plano e devolve o resultado por sinal."""
    succeeded = pyqtSignal(object)
    failed = pyqtSignal(object)  # exceção levantada pela função

    def __init__(self, fn: Callable[..., Any], *args: Any):
        super().__init__()
        self.fn = fn
        self.args = args
        self._detached = False
        cast(Any, self.finished).connect(self._release)

    def start(self, *args: Any) -> None:
        _RUNNING.add(self)
        super().start(*args)

    def _release(self) -> None:
        _RUNNING.discard(self)

    def detach(self) -> None:
        """Desliga os sinais de resultado; usado quando a tela dona é fechada."""
        if self._detached:
            return
        self._detached = True
        for signal in (self.succeeded, self.failed):
            try:
                signal.disconnect()
            except TypeError:
                pass  # nenhum slot conectado

    def run(self):
        try:
            result = self.fn(*self.args)
        except Exception as e:
            self.failed.emit(e)
            return
        self.succeeded.emit(result)



def wait_running(msecs: int = 15000) -> None:
    """Aguarda as threads ainda em execução (usado ao encerrar o app)."""
    for worker in list(_RUNNING):
        worker.wait(msecs)
