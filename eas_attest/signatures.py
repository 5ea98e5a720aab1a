from eth_abi import encode
from web3 import Web3

ZERO_ADDRESS = '0x0000000000000000000000000000000000000000'
ZERO_BYTES32 = '0x' + '00' * 32

ATTEST_1 = 'attest((bytes32,(address,uint64,bool,bytes32,bytes,uint256)))'
REGISTER_1 = 'register(string,address,bool)'
ENCODE_DATA_1 = 'encodeData(address,uint256,bytes32)'

ATTESTED_1 = 'Attested(address,address,bytes32,bytes32)'
REGISTERED_1 = 'Registered(bytes32,address,(bytes32,address,bool,string))'

def arg_types(signature):
    """
    Split the argument list of a canonical signature into its top-level types.

    'attest((bytes32,(address,uint64)))' -> ['(bytes32,(address,uint64))']
    """

    inner = signature[signature.index('(') + 1:-1]

    types, depth, current = [], 0, ''
    for ch in inner:
        if ch == ',' and depth == 0:
            types.append(current)
            current = ''
            continue
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
        current += ch

    if current:
        types.append(current)

    return types

def selector(signature):
    return bytes(Web3.keccak(text=signature)[:4])

def topic(signature):
    return Web3.to_hex(Web3.keccak(text=signature))

def encode_call(signature, args):
    return "0x" + (selector(signature) + encode(arg_types(signature), args)).hex()


if __name__ == '__main__':

    local_vars = list(locals().items())

    for var, val in local_vars:

        if isinstance(val, str) and "__" not in var and "(" in val:
            print("     " + var)

            print(topic(val), " -> ", val)
