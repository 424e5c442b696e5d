from conftest import criar_usuario, login


def test_criar_barbearia_vincula_o_usuario(client, db):
    criar_usuario(db, "dono@navalha.com.br")
    headers = login(client, "dono@navalha.com.br")

    resposta = client.post(
        "/api/v1/barbearias",
        json={"nome": "Navalha de Ouro", "cidade": "Olinda", "estado": "pe"},
        headers=headers,
    )
    assert resposta.status_code == 201, resposta.text
    barbearia = resposta.json()
    assert barbearia["estado"] == "PE"
    assert barbearia["slug"] == "navalha-de-ouro"

    assert client.get("/api/v1/auth/me", headers=headers).json()["barbearia_id"] == barbearia["id"]
    assert client.get("/api/v1/barbearias/minha", headers=headers).json()["nome"] == "Navalha de Ouro"

    de_novo = client.post(
        "/api/v1/barbearias",
        json={"nome": "Outra", "cidade": "Olinda", "estado": "PE"},
        headers=headers,
    )
    assert de_novo.status_code == 409


def test_atualizar_minha_barbearia(client, headers_admin, headers_profissional):
    resposta = client.put("/api/v1/barbearias/minha", json={"telefone": "8133334444"}, headers=headers_admin)
    assert resposta.status_code == 200
    assert resposta.json()["telefone"] == "8133334444"

    negado = client.put("/api/v1/barbearias/minha", json={"telefone": "0"}, headers=headers_profissional)
    assert negado.status_code == 403


def test_logo_sem_storage_configurado(client, headers_admin):
    resposta = client.post(
        "/api/v1/barbearias/minha/logo",
        files={"logo": ("logo.png", b"nao-e-imagem", "image/png")},
        headers=headers_admin,
    )
    assert resposta.status_code == 503
