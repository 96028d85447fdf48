"""
CRM Proxy — Abstract CRM Client Interface
==========================================

What:  Abstract base class for the single outbound HTTP seam of the proxy.
Why:   The forwarder only knows how to build a ForwardRequest; how it travels
       upstream (and how transport failures surface) is the client's job.
       Tests swap in an AsyncMock implementing this contract.
"""

from abc import ABC, abstractmethod

from crm_proxy.schemas.forwarding import ForwardRequest, ForwardResponse


class CRMClient(ABC):
    """
    Contract:
        - send() performs exactly one HTTP exchange, never retries
        - Any completed exchange is returned as a ForwardResponse, whatever
          the status code
        - Anything that prevents completion is raised as UpstreamTransportError
    """

    @abstractmethod
    async def send(self, request: ForwardRequest) -> ForwardResponse:
        """
        Issue the upstream call described by `request`.

        Raises:
            UpstreamTransportError: connection/DNS failure, timeout, or an
                upstream body that cannot be decoded as JSON.
        """
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release pooled connections. Called on application shutdown."""
        ...
