import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from core.base import AgencyTransport, SendProofError, AgencyConnectionError


def make_agency(status: int, body=None, text: str=None):
    received = []

    async def handler(request):
        received.append(dict(content_type=request.content_type, message=await request.json()))
        if body is not None:
            return web.json_response(body, status=status)
        return web.Response(status=status, text=text or '')

    app = web.Application()
    app.router.add_post(AgencyTransport.MESSAGE_PATH, handler)
    return TestServer(app), received


@pytest.mark.asyncio
async def test_send_proof():
    server, received = make_agency(202, body={'status': 'OK'})
    await server.start_server()
    try:
        transport = AgencyTransport()
        resp = await transport.send_proof(
            proof={'requested_proof': {}, 'remote_did': 'did:remote'},
            agency_url=str(server.make_url('/')),
            user_pairwise_did='did:1',
            response_msg_id='r1'
        )
    finally:
        await server.close()
    assert resp == {'status': 'OK'}
    assert len(received) == 1
    assert received[0]['content_type'] == AgencyTransport.DEFAULT_CONTENT_TYPE
    message = received[0]['message']
    assert message['@type'] == AgencyTransport.PROOF
    assert message['to'] == 'did:1'
    assert message['proof'] == {'requested_proof': {}, 'remote_did': 'did:remote'}
    assert message['~thread']['thid'] == 'r1'


@pytest.mark.asyncio
async def test_send_proof_empty_response():
    server, received = make_agency(200)
    await server.start_server()
    try:
        resp = await AgencyTransport(timeout=5).send_proof(
            proof={}, agency_url=str(server.make_url('')), user_pairwise_did='did:1', response_msg_id='r1'
        )
    finally:
        await server.close()
    assert resp == {}


@pytest.mark.asyncio
async def test_send_proof_rejected():
    server, received = make_agency(500, text='Proof is invalid')
    await server.start_server()
    try:
        with pytest.raises(SendProofError) as e:
            await AgencyTransport().send_proof(
                proof={}, agency_url=str(server.make_url('/')), user_pairwise_did='did:1', response_msg_id='r1'
            )
    finally:
        await server.close()
    assert e.value.code == '500'
    assert e.value.message == 'Proof is invalid'
    assert e.value.to_json() == {'code': '500', 'message': 'Proof is invalid'}


@pytest.mark.asyncio
async def test_agency_unreachable():
    with pytest.raises(AgencyConnectionError) as e:
        await AgencyTransport(timeout=5).send_proof(
            proof={}, agency_url='http://127.0.0.1:1', user_pairwise_did='did:1', response_msg_id='r1'
        )
    assert e.value.code == 'AGENCY-UNREACHABLE'
