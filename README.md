# udpsum

udpsum is a small client/server service that runs over UDP. A client finds the
server by broadcasting a discovery packet. It then sends a stream of unsigned
32-bit integers, one request per number. The server keeps a running count and
sum across all clients.

Requests carry sequence numbers, so the exchange stays reliable:

- The client resends a request every 10 ms until the acknowledgement with the
  same sequence number arrives.
- The server accepts a request only if its sequence number is the one that
  follows the last request it accepted from that client (same address and
  port).
- Any other request is logged as `DUP!!` and not added to the sum.
- Every acknowledgement carries the sequence number of the client's last
  accepted request, the server's current request count, and the total sum as
  it stood when that request was accepted.

The server remembers at most 100 clients. Packets from further clients are
reported on standard error and ignored.

## Installation

```
pip install .
```

## Running the server

The server binds to every interface on the given port. The port must be 4000;
any other value, or a missing argument, is reported as an error and the
command exits with status 1.

```
udpsum-server 4000
```

Each line it prints starts with a local timestamp:

```
2024-01-01 12:00:00 num_reqs 0 total_sum 0
2024-01-01 12:00:01 client 192.168.0.10 id_req 1 value 7 num_reqs 1 total_sum 7
2024-01-01 12:00:01 client 192.168.0.10 DUP!! id_req 1 value 7 num_reqs 1 total_sum 7
```

Each request is handled in its own thread. Stop the server with Ctrl-C.

## Running the client

The client broadcasts a discovery packet to `255.255.255.255` on the given port
and waits for the first reply. It then reads integers from standard input and
sends them one at a time, each waiting for its acknowledgement. Numbers are
taken modulo 2**32, so negative input wraps around. Reading stops at end of
input or at the first token that does not start with a number; a token such as
`12abc` sends `12` and then stops.

```
udpsum-client 4000 < numbers.txt
```

The client prints the server's address, then one line per acknowledged
request:

```
2024-01-01 12:00:00 server_addr 192.168.0.5
2024-01-01 12:00:01 server 192.168.0.5 id_req 1 value 7 num_reqs 1 total_sum 7
```

Called without exactly one argument it prints a usage line and exits with
status 1.

## Generating test input

`udpsum-randgen` writes random integers between 1 and 50 to standard output,
one per line: 1,000,000 of them, or as many as its optional argument asks for.
When it finishes it writes `#### sum == <total>` to standard error, which you
can compare with the server's final `total_sum`.

```
udpsum-randgen > numbers.txt
udpsum-randgen 1000 > numbers.txt
udpsum-client 4000 < numbers.txt
```

## Library use

- `udpsum.protocol.Packet` encodes and decodes the 24-byte wire format;
  `PacketType` lists the four packet kinds.
- `udpsum.processing.ServerState` holds the per-client bookkeeping;
  `ServerState.process` applies one request and returns its acknowledgement,
  and `handle_request` also sends it.
- `udpsum.server.serve` runs the receive loop on a socket you have bound,
  optionally stopping after a given number of datagrams.
- `udpsum.discovery.init_client` performs discovery and returns the socket and
  the server's address; `udpsum.interface.ClientSession` sends requests over
  such a socket.
- `udpsum.client.run_client` does both and returns the acknowledgements;
  `udpsum.client.read_values` parses numbers from a text stream.
- `udpsum.randgen.generate` yields random values from an optional
  `random.Random`.

## Limitations

- Discovery has no timeout: if no server answers, the client waits forever.
- The server port is fixed at 4000.
- Totals live in memory only and are lost when the server stops.