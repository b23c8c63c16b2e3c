# Run with: plumbline run examples/demo.py

test("Add two numbers", lambda: expect(1 + 2).to_be(3))

test("Sub two numbers", lambda: expect(1 - 2).to_be(4))


def danger():
    raise RuntimeError("Danger!")


test("Calls a function", danger)

test("Calls a dangerous function", lambda: expect(danger).to_throw())


def collections():
    expect([1, 2, 3]).to_contain(2)
    expect([1, 2, 3]).not_.to_contain(5)
    expect({"name": "plumb", "depth": 0}).to_contain_key("depth")
    expect({"name": "plumb"}).to_contain_entry(("name", "plumb"))


it("Checks collections", collections)

it("Tolerates float error", lambda: expect(0.1 + 0.2).to_be_close_to(0.3, 0.0001))
