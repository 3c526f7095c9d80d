"""Sample files and an in-process sample server shared by the tests."""

import httpx

from docs_inline.samples import SampleFetcher

RAW = "https://raw.githubusercontent.com/atomist/samples/master"
WEB = "https://github.com/atomist/samples/tree/master"

DOTNET_SAMPLE = '''import { GeneratorRegistration } from "@atomist/sdm";

// atomist:code-snippet:start=dotnetGenerator
export const DotnetCoreGenerator: GeneratorRegistration = {
    name: "DotnetCoreGenerator",
};
// atomist:code-snippet:end

export const other = 1;
'''

HELLO_SAMPLE = '''// atomist:code-snippet:start=helloWorld
export async function helloWorldListener(ci) {
    return ci.addressChannels("Hello, world");
}
// atomist:code-snippet:end
'''


class SampleServer:
    """Serves sample files to an httpx client and records what was asked."""

    def __init__(self, files: dict[str, str]):
        self.files = files
        self.requested: list[str] = []
        self.unreachable: set[str] = set()

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        if url in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if url in self.files:
            return httpx.Response(200, text=self.files[url])
        return httpx.Response(404, text="404: Not Found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def fetcher(self) -> SampleFetcher:
        return SampleFetcher(timeout=5, transport=self.transport)
